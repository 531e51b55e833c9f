import re
from datetime import timedelta

# Microseconds per unit; nanoseconds are truncated to timedelta resolution
_UNITS = {
	'ns': 0.001,
	'us': 1,
	'µs': 1,
	'μs': 1,
	'ms': 1000,
	's': 1000000,
	'm': 60 * 1000000,
	'h': 3600 * 1000000,
}

# Largest duration representable as signed 64-bit nanoseconds, in microseconds
_MAX_MICROSECONDS = (2 ** 63 - 1) / 1000

_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")
_UNIT = re.compile(r"[^\d.]*")


def parse_duration(value: str) -> timedelta:
	"""
	Parse a duration string such as ``10m``, ``1h30m``, ``1.5s`` or ``-1m``.

	A duration is an optionally signed sequence of decimal numbers, each with
	an optional fraction and a unit suffix. Valid units are ``ns``, ``us``
	(or ``µs``), ``ms``, ``s``, ``m`` and ``h``. A bare ``0`` is accepted.

	Parameters
	----------
	value: `str`
		The duration string

	Returns
	-------
	delta: `timedelta`
		The parsed duration.

	Raises
	------
	ValueError
		If the string is not a valid duration.
	"""
	if not isinstance(value, str):
		raise ValueError(f"invalid duration {value!r}")

	text = value
	sign = 1
	if text[:1] in ('-', '+'):
		if text[0] == '-':
			sign = -1
		text = text[1:]

	if text == '0':
		return timedelta(0)
	if not text:
		raise ValueError(f'time: invalid duration "{value}"')

	total = 0.0
	pos = 0
	while pos < len(text):
		number = _NUMBER.match(text, pos)
		if not number:
			raise ValueError(f'time: invalid duration "{value}"')
		unit = _UNIT.match(text, number.end()).group()
		if not unit:
			raise ValueError(f'time: missing unit in duration "{value}"')
		if unit not in _UNITS:
			raise ValueError(f'time: unknown unit "{unit}" in duration "{value}"')
		total += float(number.group()) * _UNITS[unit]
		pos = number.end() + len(unit)
		if total > _MAX_MICROSECONDS:
			raise ValueError(f'time: invalid duration "{value}"')

	return timedelta(microseconds=sign * round(total))


def _format_fraction(whole: int, fraction: int, digits: int) -> str:
	"""Render ``whole.fraction`` with trailing zeros of the fraction removed."""
	if not fraction:
		return str(whole)
	return f"{whole}.{fraction:0{digits}d}".rstrip('0')


def format_duration(delta: timedelta) -> str:
	"""
	Render a timedelta the way duration strings are written in config files.

	Examples: ``10m0s``, ``1h30m0s``, ``-1m0s``, ``1.5s``, ``250ms``, ``0s``.
	"""
	micros = (delta.days * 86400 + delta.seconds) * 1000000 + delta.microseconds
	if micros == 0:
		return '0s'

	prefix = '-' if micros < 0 else ''
	micros = abs(micros)

	if micros < 1000:
		return f"{prefix}{micros}µs"
	if micros < 1000000:
		ms, frac = divmod(micros, 1000)
		return f"{prefix}{_format_fraction(ms, frac, 3)}ms"

	total_seconds, frac = divmod(micros, 1000000)
	hours, remainder = divmod(total_seconds, 3600)
	minutes, seconds = divmod(remainder, 60)

	parts = []
	if hours:
		parts.append(f"{hours}h")
	if hours or minutes:
		parts.append(f"{minutes}m")
	parts.append(f"{_format_fraction(seconds, frac, 6)}s")

	return prefix + ''.join(parts)
