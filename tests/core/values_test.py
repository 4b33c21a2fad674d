import unittest

from lexor.core.values import NUL, Boolean, Character, Float, Integer, Text, Void, from_field, parse_number, zero


class CoercionTestCase(unittest.TestCase):

    def test_to_text(self):
        cases = [
            (Integer(42), "42"),
            (Integer(-7), "-7"),
            (Float(2.5), "2.5"),
            (Float(3.0), "3.0"),
            (Character("x"), "x"),
            (Boolean(True), "TRUE"),
            (Boolean(False), "FALSE"),
            (Text("hello"), "hello"),
            (Void(), ""),
        ]
        for value, expected in cases:
            self.assertEqual(expected, value.to_text(), value)

    def test_to_number(self):
        cases = [
            (Integer(42), 42),
            (Float(2.5), 2.5),
            (Character("A"), 65),
            (Character(NUL), 0),
            (Boolean(True), 1),
            (Boolean(False), 0),
            (Text("3.25"), 3.25),
            (Text(" 12 "), 12),
            (Text("-4"), -4),
            (Text("abc"), 0),
            (Text("12abc"), 0),
            (Text("nan"), 0),
            (Text(""), 0),
            (Void(), 0),
        ]
        for value, expected in cases:
            self.assertEqual(expected, value.to_number(), value)

    def test_to_boolean(self):
        should_be_true = [Integer(1), Integer(-1), Float(0.5), Character("a"), Boolean(True), Text("FALSE"), Text(" ")]
        for value in should_be_true:
            self.assertTrue(value.to_boolean(), value)

        should_be_false = [Integer(0), Float(0.0), Character(NUL), Boolean(False), Text(""), Void()]
        for value in should_be_false:
            self.assertFalse(value.to_boolean(), value)

    def test_round_trip(self):
        self.assertTrue(Text(Boolean(True).to_text()).to_boolean())
        self.assertEqual(5, Text(Integer(5).to_text()).to_number())

    def test_parse_number(self):
        should_pass = {"1": 1.0, "1.5": 1.5, ".5": 0.5, "2.": 2.0, "1e3": 1000.0, "+3": 3.0, "\t7 ": 7.0}
        for case, expected in should_pass.items():
            self.assertEqual(expected, parse_number(case), case)

        should_fail = ["", "x", "1,5", "inf", "1_000", "--1"]
        for case in should_fail:
            self.assertEqual(0.0, parse_number(case), case)


class DeclaredTypeTestCase(unittest.TestCase):

    def test_zero(self):
        self.assertEqual(Integer(0), zero("INT"))
        self.assertEqual(Float(0.0), zero("FLOAT"))
        self.assertEqual(Character(NUL), zero("CHAR"))
        self.assertEqual(Boolean(False), zero("BOOL"))
        self.assertRaises(KeyError, zero, "STRING")

    def test_from_field(self):
        cases = [
            ("INT", "12", Integer(12)),
            ("INT", "12.9", Integer(12)),
            ("INT", "-3.7", Integer(-3)),
            ("INT", "abc", Integer(0)),
            ("INT", "1e400", Integer(0)),
            ("INT", "-1e400", Integer(0)),
            ("FLOAT", "1e400", Float(float("inf"))),
            ("FLOAT", "3.5", Float(3.5)),
            ("FLOAT", "", Float(0.0)),
            ("CHAR", "xyz", Character("x")),
            ("CHAR", "", Character(NUL)),
            ("BOOL", "TRUE", Boolean(True)),
            ("BOOL", "true", Boolean(True)),
            ("BOOL", "True", Boolean(False)),
            ("BOOL", "1", Boolean(False)),
        ]
        for type_tag, field, expected in cases:
            self.assertEqual(expected, from_field(type_tag, field), (type_tag, field))

        self.assertIsInstance(from_field("INT", "12.9").value, int)
        self.assertRaises(ValueError, from_field, "STRING", "x")


if __name__ == '__main__':
    unittest.main()
