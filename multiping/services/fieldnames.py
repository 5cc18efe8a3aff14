import hashlib
import re

# Both constants are part of the collector's stored series names; changing
# either one starts new series for every host.
FIELD_HASH_ALGORITHM = "md5"
FIELD_HASH_LENGTH = 6

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_INVALID_FIRST_CHAR = re.compile(r"^[^A-Za-z_]")


def clean_fieldname(name: str) -> str:
    """Replace everything the collector does not accept in a field name with '_'."""
    name = _INVALID_FIRST_CHAR.sub("_", name)
    return _INVALID_CHARS.sub("_", name)


def field_name(host: str) -> str:
    """
    Derive the collector field name for a host.

    Sanitising alone maps e.g. 'a.example' and 'a-example' to the same name,
    so a short digest of the raw host string is appended.
    """
    digest = hashlib.new(FIELD_HASH_ALGORITHM, host.encode("utf-8")).hexdigest()
    return clean_fieldname(host) + digest[:FIELD_HASH_LENGTH]
