import hashlib

# Separates source text from context inside the hashed payload
CONTEXT_SEPARATOR = "\x01"


def generate_key(source: str, context: str = "") -> str:
    """
    Derives the stable key of a translation unit from its source text and context.

    The same (source, context) pair always yields the same key, across runs and
    processes, so the key minted on export can be re-derived on import to detect
    documents whose source or context was altered.
    """
    payload = source or ""
    if context:
        payload += CONTEXT_SEPARATOR + context

    md5 = hashlib.md5()
    md5.update(payload.encode("utf-8"))
    return md5.hexdigest()


def is_valid_key(key: str, source: str, context: str = "") -> bool:
    return bool(key) and key == generate_key(source, context)
