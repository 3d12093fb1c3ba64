import re
from typing import List, Optional, Tuple, Union

from lxml import etree

from .comments import join_comment
from .config.codec_config import ContextStrategy, XliffConfig
from .errors import ParseError, UnsupportedVersionError
from .keys import generate_key
from .logger import get_logger
from .xliff_obj import DeserializeResult, Diagnostic, DiagnosticKind, TranslationUnit

logger = get_logger(__name__)

SUPPORTED_MAJOR_VERSION = 1
_LEADING_INT = re.compile(r"^(\d+)")


class XliffDeserializer:
    """
    Reads translation units back from an XLIFF 1.2 document.

    Units that fail the key check are dropped and reported as diagnostics;
    only malformed XML or an unsupported version abort the call.
    """

    def __init__(self, config: Optional[XliffConfig] = None):
        self.config = config or XliffConfig()

    def deserialize(self, xliff_text: Union[str, bytes]) -> DeserializeResult:
        root = self._parse(xliff_text)
        self._check_version(root)

        result = DeserializeResult()
        for tu in root.xpath('//*[local-name()="trans-unit"]'):
            unit = self._read_unit(tu, result.diagnostics)
            if unit is not None:
                result.units.append(unit)

        logger.debug(f"Deserialized {len(result.units)} units with {len(result.diagnostics)} diagnostics")
        return result

    def _parse(self, xliff_text: Union[str, bytes]):
        data = xliff_text.encode("utf-8") if isinstance(xliff_text, str) else xliff_text
        parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
        try:
            return etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            raise ParseError(str(e)) from e

    def _check_version(self, root):
        version = root.get("version", "")
        match = _LEADING_INT.match(version)
        if match:
            version = match.group(1)
        if not match or int(version) != SUPPORTED_MAJOR_VERSION:
            raise UnsupportedVersionError(version)

    def _split_identity(self, tu) -> Tuple[str, str, str]:
        """Returns (key, context, resname comment line) according to the context strategy."""
        strategy = self.config.context_strategy
        unit_id = tu.get("id", "")

        if strategy == ContextStrategy.EXTRADATA:
            return unit_id, tu.get("extradata", ""), tu.get("resname", "")
        if strategy == ContextStrategy.RESNAME:
            return unit_id, tu.get("resname", ""), ""

        key, _, context = unit_id.partition(":")
        return key, context, ""

    def _read_unit(self, tu, diagnostics: List[Diagnostic]) -> Optional[TranslationUnit]:
        key, context, resname = self._split_identity(tu)
        comment = join_comment([_text(note) for note in _children(tu, "note")], resname)

        source_elem = _first_child(tu, "source")
        target_elem = _first_child(tu, "target")

        flags = []
        state = ""
        target = ""
        if target_elem is not None:
            state = target_elem.get("state", "")
            target = _text(target_elem)
        else:
            self._report(diagnostics, Diagnostic(DiagnosticKind.MISSING_TARGET, key=key))

        if state:
            flags.append(f"state-{state}")

        source = _text(source_elem) if source_elem is not None else ""
        fuzzy = tu.get("approved") == "no"

        if not key:
            self._report(diagnostics, Diagnostic(DiagnosticKind.EMPTY_KEY))
            return None

        if key != generate_key(source, context):
            self._report(diagnostics, Diagnostic(DiagnosticKind.BAD_KEY, key=key, context=context))
            return None

        if state and not self.config.is_valid_state(state):
            self._report(diagnostics, Diagnostic(DiagnosticKind.INVALID_STATE, key=key, state=state))
            target = ""

        if not target and not comment:
            return None

        return TranslationUnit(
            key=key,
            source=source,
            target=target,
            context=context,
            comment=comment,
            fuzzy=fuzzy,
            flags=flags,
        )

    @staticmethod
    def _report(diagnostics: List[Diagnostic], diagnostic: Diagnostic):
        logger.warning(str(diagnostic))
        diagnostics.append(diagnostic)


def _children(node, local_name: str):
    return node.xpath(f'*[local-name()="{local_name}"]')


def _first_child(node, local_name: str):
    nodes = _children(node, local_name)
    return nodes[0] if nodes else None


def _text(node) -> str:
    """Text content of the node, inline markup flattened."""
    return str(node.xpath("string()"))
