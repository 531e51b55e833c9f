import re
from typing import List

QUALIFIED_NAME_MAX_LENGTH = 63
DNS1123_SUBDOMAIN_MAX_LENGTH = 253

_QNAME_CHAR_FMT = "[A-Za-z0-9]"
_QNAME_EXT_CHAR_FMT = "[-A-Za-z0-9_.]"
QUALIFIED_NAME_FMT = f"({_QNAME_CHAR_FMT}{_QNAME_EXT_CHAR_FMT}*)?{_QNAME_CHAR_FMT}"
QUALIFIED_NAME_ERR_MSG = "must consist of alphanumeric characters, '-', '_' or '.', and must start and end with an alphanumeric character"

_DNS1123_LABEL_FMT = "[a-z0-9]([-a-z0-9]*[a-z0-9])?"
DNS1123_SUBDOMAIN_FMT = _DNS1123_LABEL_FMT + "(\\." + _DNS1123_LABEL_FMT + ")*"
DNS1123_SUBDOMAIN_ERR_MSG = "a lowercase RFC 1123 subdomain must consist of lower case alphanumeric characters, '-' or '.', and must start and end with an alphanumeric character"

_QUALIFIED_NAME_RE = re.compile(QUALIFIED_NAME_FMT)
_DNS1123_SUBDOMAIN_RE = re.compile(DNS1123_SUBDOMAIN_FMT)


def _regex_error(msg: str, fmt: str, *examples: str) -> str:
	"""Build a grammar error message with examples, e.g. "... (e.g. 'MyName',  or 'my.name', regex used ...)"."""
	if not examples:
		return f"{msg} (regex used for validation is '{fmt}')"
	text = msg + " (e.g. "
	for i, example in enumerate(examples):
		if i > 0:
			text += " or "
		text += f"'{example}', "
	return text + f"regex used for validation is '{fmt}')"


def is_dns1123_subdomain(value: str) -> List[str]:
	"""Return the reasons ``value`` is not a lowercase RFC 1123 subdomain (empty if it is)."""
	errs = []
	if len(value) > DNS1123_SUBDOMAIN_MAX_LENGTH:
		errs.append(f"must be no more than {DNS1123_SUBDOMAIN_MAX_LENGTH} characters")
	if not _DNS1123_SUBDOMAIN_RE.fullmatch(value):
		errs.append(_regex_error(DNS1123_SUBDOMAIN_ERR_MSG, DNS1123_SUBDOMAIN_FMT, "example.com"))
	return errs


def is_qualified_name(value: str) -> List[str]:
	"""
	Validate ``value`` as a qualified name: an optional DNS subdomain prefix
	and '/', followed by a name part of at most 63 alphanumeric-bounded
	characters (e.g. ``example.com/MyName``).

	Returns
	-------
	errs: `list`
		Human readable reasons the value is invalid, empty when it is valid.
	"""
	errs = []
	parts = value.split("/")
	if len(parts) == 1:
		name = parts[0]
	elif len(parts) == 2:
		prefix, name = parts
		if not prefix:
			errs.append("prefix part must be non-empty")
		else:
			errs.extend("prefix part " + msg for msg in is_dns1123_subdomain(prefix))
	else:
		return [
			"a qualified name " + _regex_error(QUALIFIED_NAME_ERR_MSG, QUALIFIED_NAME_FMT, "MyName", "my.name", "123-abc")
			+ " with an optional DNS subdomain prefix and '/' (e.g. 'example.com/MyName')"
		]

	if not name:
		errs.append("name part must be non-empty")
	elif len(name) > QUALIFIED_NAME_MAX_LENGTH:
		errs.append(f"name part must be no more than {QUALIFIED_NAME_MAX_LENGTH} characters")
	if not _QUALIFIED_NAME_RE.fullmatch(name):
		errs.append("name part " + _regex_error(QUALIFIED_NAME_ERR_MSG, QUALIFIED_NAME_FMT, "MyName", "my.name", "123-abc"))
	return errs
