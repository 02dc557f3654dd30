import unittest

from monkey.runtime.objects import (Array, Boolean, Builtin, Error, Hash, HashKey, HashPair, Integer, Optional,
                                    ReturnValue, String, FALSE, NONE, TRUE)


class ObjectsTestCase(unittest.TestCase):

    def test_inspect(self):
        cases = {
            "42": Integer(42),
            "-7": Integer(-7),
            "true": TRUE,
            "false": FALSE,
            '"hi"': String("hi"),
            "[1, \"a\", false]": Array([Integer(1), String("a"), FALSE]),
            "[]": Array(),
            "{}": Hash(),
            "maybe(1)": Optional(Integer(1)),
            "maybe([no value])": NONE,
            "builtin function": Builtin("len", None),
            "Error at position 3:4 - boom": Error("boom", 3, 4),
            "5": ReturnValue(Integer(5)),
        }
        for case, obj in cases.items():
            self.assertEqual(case, obj.inspect(), msg=case)

    def test_hash_keys(self):
        self.assertEqual(String("name").hash_key(), String("name").hash_key())
        self.assertEqual(Integer(1).hash_key(), Integer(1).hash_key())
        self.assertNotEqual(Integer(1).hash_key(), TRUE.hash_key())
        self.assertNotEqual(String("1").hash_key(), Integer(1).hash_key())
        self.assertNotEqual(TRUE.hash_key(), FALSE.hash_key())

    def test_hash(self):
        pairs = {String("a").hash_key(): HashPair(String("a"), Integer(1))}
        hash_obj = Hash(pairs)

        self.assertEqual(1, hash_obj.get(String("a")).value)
        self.assertIsNone(hash_obj.get(String("b")))
        self.assertEqual('{"a": 1}', hash_obj.inspect())
        self.assertEqual(HashKey("STRING", "a"), next(iter(hash_obj.pairs)))

    def test_boolean_singletons(self):
        self.assertIs(TRUE, Boolean.of(1 < 2))
        self.assertIs(FALSE, Boolean.of(""))

    def test_optional_wrap(self):
        self.assertIs(NONE, Optional.wrap(None))

        present = Optional.wrap(Integer(3))
        self.assertTrue(present.has_value)
        self.assertIs(present, Optional.wrap(present))
        self.assertIs(NONE, Optional.wrap(NONE))

    def test_no_nesting(self):
        self.assertRaises(AssertionError, Optional, NONE)
        self.assertRaises(AssertionError, ReturnValue, ReturnValue(Integer(1)))

    def test_kinds(self):
        cases = {
            "INTEGER": Integer(0), "BOOLEAN": TRUE, "STRING": String(""), "ARRAY": Array(), "HASH": Hash(),
            "BUILTIN": Builtin("len", None), "ERROR": Error("", 1, 1), "OPTIONAL": NONE,
            "RETURN_VALUE": ReturnValue(NONE),
        }
        for case, obj in cases.items():
            self.assertEqual(case, obj.kind, msg=case)


if __name__ == '__main__':
    unittest.main()
