import unittest

from lxml import etree

from xliffcodec.config.codec_config import resolve_config
from xliffcodec.errors import SerializeError, XliffCodecError
from xliffcodec.keys import generate_key
from xliffcodec.serializer import XLIFF_NS, XliffSerializer
from xliffcodec.xliff_obj import TranslationUnit, mint_unit

NS = {"x": XLIFF_NS}
XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"


def parse(text):
    return etree.fromstring(text.encode("utf-8"))


def trans_units(text):
    return parse(text).findall(".//x:trans-unit", NS)


class TestSerializerExamples(unittest.TestCase):
    def test_example_a_translated_unit(self):
        unit = mint_unit("Hello", target="Bonjour")
        out = XliffSerializer("en").serialize([unit], "messages.json", "fr")

        self.assertIn('<source xml:lang="en">Hello</source>', out)
        self.assertIn('<target xml:lang="fr" state="translated">Bonjour</target>', out)

        tu = trans_units(out)[0]
        self.assertEqual(tu.get("approved"), "yes")
        self.assertEqual(tu.get("id"), generate_key("Hello", ""))

    def test_example_b_empty_target(self):
        unit = mint_unit("Hello", target="")
        out = XliffSerializer("en").serialize([unit], "messages.json", "fr")

        self.assertIn('<target xml:lang="fr" state="new"></target>', out)
        target = trans_units(out)[0].find("x:target", NS)
        self.assertIn(target.text, (None, ""))

    def test_document_header(self):
        out = XliffSerializer("en").serialize([], "messages.json", "pt-br")
        self.assertTrue(out.startswith("<?xml"))
        root = parse(out)
        self.assertEqual(root.tag, f"{{{XLIFF_NS}}}xliff")
        self.assertEqual(root.get("version"), "1.2")

        file_elem = root.find("x:file", NS)
        self.assertEqual(file_elem.get("original"), "messages.json")
        self.assertEqual(file_elem.get("source-language"), "en")
        self.assertEqual(file_elem.get("target-language"), "pt-BR")
        self.assertEqual(file_elem.get("datatype"), "x-unknown")
        self.assertIsNotNone(file_elem.find("x:body", NS))

    def test_custom_datatype(self):
        cfg = resolve_config({"file_datatype": "plaintext"})
        out = XliffSerializer("en", cfg).serialize([], "a.txt", "de")
        self.assertEqual(parse(out).find("x:file", NS).get("datatype"), "plaintext")

    def test_four_space_indentation(self):
        out = XliffSerializer("en").serialize([mint_unit("Hi", target="Salut")], "f", "fr")
        self.assertIn('\n    <file ', out)
        self.assertIn('\n        <body>', out)
        self.assertIn('\n            <trans-unit ', out)


class TestSerializerSameLanguage(unittest.TestCase):
    def test_no_target_language_no_approved_no_target(self):
        unit = mint_unit("Hello", target="Hello")
        out = XliffSerializer("en").serialize([unit], "f", "en")

        file_elem = parse(out).find("x:file", NS)
        self.assertIsNone(file_elem.get("target-language"))

        tu = trans_units(out)[0]
        self.assertIsNone(tu.get("approved"))
        self.assertIsNone(tu.find("x:target", NS))
        self.assertEqual(tu.find("x:source", NS).get(XML_LANG), "en")


class TestSerializerOrderingAndFlags(unittest.TestCase):
    def test_order_is_preserved(self):
        units = [mint_unit(s, target=s.upper()) for s in ("one", "two", "three", "four")]
        out = XliffSerializer("en").serialize(units, "f", "de")
        ids = [tu.get("id") for tu in trans_units(out)]
        self.assertEqual(ids, [u.key for u in units])

    def test_fuzzy_is_not_approved(self):
        unit = mint_unit("Hello", target="Hallo", fuzzy=True)
        out = XliffSerializer("en").serialize([unit], "f", "de")
        self.assertEqual(trans_units(out)[0].get("approved"), "no")

    def test_empty_key_is_never_emitted(self):
        units = [TranslationUnit(key="", source="x", target="y"), mint_unit("Hello", target="Hallo")]
        out = XliffSerializer("en").serialize(units, "f", "de")
        self.assertEqual(len(trans_units(out)), 1)

    def test_empty_state_is_not_written(self):
        cfg = resolve_config({"state_untranslated": ""})
        out = XliffSerializer("en", cfg).serialize([mint_unit("Hello")], "f", "de")
        target = trans_units(out)[0].find("x:target", NS)
        self.assertIsNotNone(target)
        self.assertIsNone(target.get("state"))

    def test_custom_translated_state(self):
        cfg = resolve_config({"state_translated": "final"})
        out = XliffSerializer("en", cfg).serialize([mint_unit("Hello", target="Hallo")], "f", "de")
        self.assertEqual(trans_units(out)[0].find("x:target", NS).get("state"), "final")

    def test_special_characters_are_escaped(self):
        unit = mint_unit("a < b & c", target="a < b & c")
        out = XliffSerializer("en").serialize([unit], "f", "de")
        self.assertIn("a &lt; b &amp; c", out)
        self.assertEqual(trans_units(out)[0].find("x:source", NS).text, "a < b & c")


class TestUntranslatedStrategies(unittest.TestCase):
    def setUp(self):
        self.units = [mint_unit("Yes", target="Oui"), mint_unit("No", target="")]

    def test_emptytarget(self):
        out = XliffSerializer("en").serialize(self.units, "f", "fr")
        tus = trans_units(out)
        self.assertEqual(len(tus), 2)
        self.assertEqual(tus[1].find("x:target", NS).get("state"), "new")

    def test_notarget(self):
        cfg = resolve_config({"untranslated_strategy": "notarget"})
        tus = trans_units(XliffSerializer("en", cfg).serialize(self.units, "f", "fr"))
        self.assertEqual(len(tus), 2)
        self.assertIsNotNone(tus[0].find("x:target", NS))
        self.assertIsNone(tus[1].find("x:target", NS))
        self.assertIsNotNone(tus[1].find("x:source", NS))

    def test_notransunit(self):
        cfg = resolve_config({"untranslated_strategy": "notransunit"})
        tus = trans_units(XliffSerializer("en", cfg).serialize(self.units, "f", "fr"))
        self.assertEqual([tu.get("id") for tu in tus], [self.units[0].key])


class TestContextStrategies(unittest.TestCase):
    def setUp(self):
        self.unit = mint_unit("Open", target="Ouvrir", context="verb")

    def test_extradata(self):
        tu = trans_units(XliffSerializer("en").serialize([self.unit], "f", "fr"))[0]
        self.assertEqual(tu.get("id"), self.unit.key)
        self.assertEqual(tu.get("extradata"), "verb")
        self.assertIsNone(tu.get("resname"))

    def test_resname(self):
        cfg = resolve_config({"context_strategy": "resname"})
        tu = trans_units(XliffSerializer("en", cfg).serialize([self.unit], "f", "fr"))[0]
        self.assertEqual(tu.get("id"), self.unit.key)
        self.assertEqual(tu.get("resname"), "verb")
        self.assertIsNone(tu.get("extradata"))

    def test_id(self):
        cfg = resolve_config({"context_strategy": "id"})
        tu = trans_units(XliffSerializer("en", cfg).serialize([self.unit], "f", "fr"))[0]
        self.assertEqual(tu.get("id"), f"{self.unit.key}:verb")
        self.assertIsNone(tu.get("extradata"))
        self.assertIsNone(tu.get("resname"))

    def test_empty_context_writes_nothing(self):
        unit = mint_unit("Open", target="Ouvrir")
        for strategy in ("extradata", "resname", "id"):
            cfg = resolve_config({"context_strategy": strategy})
            tu = trans_units(XliffSerializer("en", cfg).serialize([unit], "f", "fr"))[0]
            self.assertEqual(tu.get("id"), unit.key)
            self.assertIsNone(tu.get("extradata"))
            self.assertIsNone(tu.get("resname"))


class TestComments(unittest.TestCase):
    def test_hint_becomes_resname(self):
        unit = mint_unit("Hello", target="Hallo", comment="greeting.title\nShown on the start page\nKeep short")
        tu = trans_units(XliffSerializer("en").serialize([unit], "f", "de"))[0]
        self.assertEqual(tu.get("resname"), "greeting.title")
        notes = tu.findall("x:note", NS)
        self.assertEqual([n.text for n in notes], ["Shown on the start page", "Keep short"])
        self.assertTrue(all(n.get("from") == "developer" for n in notes))

    def test_single_line_hint_gives_no_notes(self):
        unit = mint_unit("Hello", target="Hallo", comment="greeting.title")
        tu = trans_units(XliffSerializer("en").serialize([unit], "f", "de"))[0]
        self.assertEqual(tu.get("resname"), "greeting.title")
        self.assertEqual(tu.findall("x:note", NS), [])

    def test_hint_disabled(self):
        cfg = resolve_config({"use_hint_for_resname": False})
        unit = mint_unit("Hello", target="Hallo", comment="line 1\nline 2")
        tu = trans_units(XliffSerializer("en", cfg).serialize([unit], "f", "de"))[0]
        self.assertIsNone(tu.get("resname"))
        self.assertEqual([n.text for n in tu.findall("x:note", NS)], ["line 1", "line 2"])

    def test_resname_context_is_not_overwritten_by_hint(self):
        cfg = resolve_config({"context_strategy": "resname"})
        unit = mint_unit("Open", target="Ouvrir", context="verb", comment="menu.open\nFile menu")
        tu = trans_units(XliffSerializer("en", cfg).serialize([unit], "f", "fr"))[0]
        self.assertEqual(tu.get("resname"), "verb")
        self.assertEqual([n.text for n in tu.findall("x:note", NS)], ["menu.open", "File menu"])

    def test_hint_resname_coexists_with_id_strategy_only_as_notes(self):
        cfg = resolve_config({"context_strategy": "id"})
        unit = mint_unit("Open", target="Ouvrir", context="verb", comment="menu.open")
        tu = trans_units(XliffSerializer("en", cfg).serialize([unit], "f", "fr"))[0]
        self.assertIsNone(tu.get("resname"))
        self.assertEqual([n.text for n in tu.findall("x:note", NS)], ["menu.open"])


class TestChildOrder(unittest.TestCase):
    def test_source_target_notes_order(self):
        unit = mint_unit("Hello", target="Bonjour", comment="res\nnote one\nnote two")
        tu = trans_units(XliffSerializer("en").serialize([unit], "f", "fr"))[0]
        self.assertEqual([etree.QName(c).localname for c in tu], ["source", "target", "note", "note"])

    def test_source_first_without_target(self):
        cfg = resolve_config({"untranslated_strategy": "notarget", "use_hint_for_resname": False})
        unit = mint_unit("Hello", target="", comment="only note")
        tu = trans_units(XliffSerializer("en", cfg).serialize([unit], "f", "fr"))[0]
        self.assertEqual([etree.QName(c).localname for c in tu], ["source", "note"])


class TestUnwritableText(unittest.TestCase):
    def test_control_character_in_source(self):
        unit = mint_unit("a\x0bb", target="x")
        with self.assertRaises(SerializeError) as ctx:
            XliffSerializer("en").serialize([unit], "f", "fr")
        self.assertEqual(ctx.exception.key, unit.key)
        self.assertIn(unit.key, str(ctx.exception))

    def test_control_character_in_comment(self):
        unit = mint_unit("Hello", target="Bonjour", comment="res\nbad\x00note")
        with self.assertRaises(XliffCodecError):
            XliffSerializer("en").serialize([unit], "f", "fr")


if __name__ == "__main__":
    unittest.main()
