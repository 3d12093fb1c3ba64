import re

_SUBTAG_SPLIT = re.compile(r"[-_]")


def locale_from_lang(lang: str) -> str:
    """
    Converts a lower-case language tag into the locale code written to xml:lang.

    'pt-br' -> 'pt-BR', 'zh-hant-tw' -> 'zh-Hant-TW', 'en' -> 'en'
    """
    if not lang:
        return ""

    subtags = _SUBTAG_SPLIT.split(lang)
    parts = [subtags[0].lower()]
    for subtag in subtags[1:]:
        if len(subtag) == 4 and subtag.isalpha():
            parts.append(subtag.title())  # script
        elif (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit()):
            parts.append(subtag.upper())  # region
        else:
            parts.append(subtag)
    return "-".join(parts)
