from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from xliffcodec.config.codec_config import XliffConfig, resolve_config
from xliffcodec.parser import XliffDeserializer
from xliffcodec.serializer import XliffSerializer
from xliffcodec.xliff_obj import DeserializeResult, TranslationUnit


@dataclass(frozen=True)
class FileMeta:
    file_id: str
    source_lang: str
    target_lang: str


class XliffCodecPlugin:
    """
    Serializer plugin interface for translation engines.
    Holds no state: the configuration is resolved once by configure() and then
    passed explicitly to every serialize/deserialize call.
    """

    name = ".XLIFF 1.2 Serializer"

    @staticmethod
    def configure(options: Optional[Mapping[str, Any]] = None) -> XliffConfig:
        return resolve_config(options)

    @staticmethod
    def serialize(units: Iterable[TranslationUnit], meta: FileMeta,
                  config: Optional[XliffConfig] = None) -> str:
        serializer = XliffSerializer(meta.source_lang, config)
        return serializer.serialize(units, meta.file_id, meta.target_lang)

    @staticmethod
    def deserialize(text: Union[str, bytes], config: Optional[XliffConfig] = None) -> DeserializeResult:
        return XliffDeserializer(config).deserialize(text)
