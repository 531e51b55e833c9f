import re
from urllib.parse import SplitResult, urlsplit

_HEX = set("0123456789abcdefABCDEF")

# Characters allowed verbatim in a host besides alphanumerics
_HOST_EXTRA = set("-_.~!$&'()*+,;=:[]<>\"%")

_PORT = re.compile(r":\d*")


def _check_escapes(value: str, host: bool = False):
	"""
	Raise ValueError on the first malformed percent-escape in ``value``.

	In a host, only ``%25`` and escapes of non-ASCII bytes are allowed.
	"""
	i = 0
	while i < len(value):
		if value[i] == '%':
			if i + 2 >= len(value) or value[i + 1] not in _HEX or value[i + 2] not in _HEX:
				raise ValueError(f'invalid URL escape "{value[i:i + 3]}"')
			if host and value[i + 1] < '8' and value[i:i + 3] != '%25':
				raise ValueError(f'invalid URL escape "{value[i:i + 3]}"')
			i += 3
		else:
			i += 1


def _check_host(host: str):
	if host.startswith('['):
		end = host.find(']')
		if end < 0:
			raise ValueError("missing ']' in host")
		port = host[end + 1:]
		if port and not _PORT.fullmatch(port):
			raise ValueError(f'invalid port "{port}" after host')
		return

	_check_escapes(host, host=True)

	colon = host.rfind(':')
	if colon >= 0 and not _PORT.fullmatch(host[colon:]):
		raise ValueError(f'invalid port "{host[colon:]}" after host')

	for char in host:
		if not char.isascii() or char.isalnum() or char in _HOST_EXTRA:
			continue
		raise ValueError(f'invalid character "{char}" in host name')


def parse_schemeless_url(image: str) -> SplitResult:
	"""
	Parse a match-image pattern as a URL, prefixing ``https://``.

	Match images are written without a scheme (``registry.io/foo``,
	``*.registry.io/*``, ``registry.io:5000/bar``). Only lexical validity is
	checked here; glob semantics are applied at image-pull time.

	Raises
	------
	ValueError
		With a message of the form ``parse "https://<image>": <cause>``.
	"""
	url = "https://" + image
	try:
		if any(ord(char) < 0x20 or ord(char) == 0x7f for char in url):
			raise ValueError("net/url: invalid control character in URL")

		parts = urlsplit(url)
		host = parts.netloc.rsplit('@', 1)[-1]
		_check_host(host)
		_check_escapes(parts.path)
		_check_escapes(parts.fragment)
	except ValueError as e:
		raise ValueError(f'parse "{url}": {e}') from e

	return parts
