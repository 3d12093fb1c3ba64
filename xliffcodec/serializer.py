from typing import Iterable, Optional

from lxml import etree

from .comments import split_comment
from .config.codec_config import ContextStrategy, UntranslatedStrategy, XliffConfig
from .errors import SerializeError
from .locales import locale_from_lang
from .logger import get_logger
from .xliff_obj import TranslationUnit

logger = get_logger(__name__)

XLIFF_NS = "urn:oasis:names:tc:xliff:document:1.2"
XLIFF_VERSION = "1.2"
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
INDENT = "    "


def _q(tag: str) -> str:
    return f"{{{XLIFF_NS}}}{tag}"


class XliffSerializer:
    """
    Writes translation units into an XLIFF 1.2 document.

    The serializer holds only the source language and the immutable config, so
    one instance can serve any number of files and target languages.
    """

    def __init__(self, source_lang: str, config: Optional[XliffConfig] = None):
        self.source_lang = source_lang
        self.config = config or XliffConfig()

    def serialize(self, units: Iterable[TranslationUnit], file_id: str, target_lang: str) -> str:
        source_locale = locale_from_lang(self.source_lang)
        target_locale = locale_from_lang(target_lang)
        translating = target_lang != self.source_lang

        root = etree.Element(_q("xliff"), nsmap={None: XLIFF_NS})
        root.set("version", XLIFF_VERSION)

        file_elem = etree.SubElement(root, _q("file"))
        file_elem.set("original", file_id)
        file_elem.set("source-language", source_locale)
        file_elem.set("datatype", self.config.file_datatype)
        if translating:
            file_elem.set("target-language", target_locale)

        body = etree.SubElement(file_elem, _q("body"))

        written = 0
        for unit in units:
            if not unit.target and self.config.untranslated_strategy == UntranslatedStrategy.NOTRANSUNIT:
                continue
            if not unit.key:
                logger.warning(f"Skipping unit with empty key (source: {unit.source!r})")
                continue

            try:
                self._append_unit(body, unit, translating, source_locale, target_locale)
            except ValueError as e:
                # lxml rejects NULL bytes and control characters in text and attributes
                raise SerializeError(unit.key, str(e)) from e
            written += 1

        logger.debug(f"Serialized {written} trans-units for {file_id} ({self.source_lang} -> {target_lang})")

        etree.indent(root, space=INDENT)
        xml = etree.tostring(root, encoding="utf-8", xml_declaration=True)
        return xml.decode("utf-8") + "\n"

    def _append_unit(self, body, unit: TranslationUnit, translating: bool,
                     source_locale: str, target_locale: str):
        config = self.config
        unit_elem = etree.SubElement(body, _q("trans-unit"))

        unit_id = unit.key
        if unit.context:
            if config.context_strategy == ContextStrategy.ID:
                unit_id += ":" + unit.context
        unit_elem.set("id", unit_id)

        if unit.context:
            if config.context_strategy == ContextStrategy.EXTRADATA:
                unit_elem.set("extradata", unit.context)
            elif config.context_strategy == ContextStrategy.RESNAME:
                unit_elem.set("resname", unit.context)

        if translating:
            unit_elem.set("approved", "no" if unit.fuzzy else "yes")

        resname, notes = split_comment(unit.comment, config.hint_is_resname)
        if resname:
            unit_elem.set("resname", resname)

        source = etree.SubElement(unit_elem, _q("source"))
        source.set(XML_LANG, source_locale)
        source.text = unit.source

        if not unit.target and config.untranslated_strategy == UntranslatedStrategy.NOTARGET:
            pass
        elif translating:
            target = etree.SubElement(unit_elem, _q("target"))
            target.set(XML_LANG, target_locale)
            # Empty string keeps an explicit <target></target> pair
            target.text = unit.target

            state = config.state_translated if unit.target else config.state_untranslated
            if state:
                target.set("state", state)

        for line in notes:
            note = etree.SubElement(unit_elem, _q("note"))
            note.set("from", "developer")
            note.text = line
