import ast
import unittest

from litup.compiler.stream import CompiledStream, Slot, normalize_stream


def slot(name):
    return Slot(ast.Name(id=name, ctx=ast.Load()))


class TestNormalizeStream(unittest.TestCase):
    def test_merges_adjacent_strings(self):
        stream = normalize_stream(["<div", " ", "class=", slot("a"), ">", "</div>"])
        self.assertEqual(stream.strings, ("<div class=", "></div>"))
        self.assertEqual([s.source() for s in stream.slots], ["a"])

    def test_pads_between_adjacent_slots(self):
        stream = normalize_stream(["<p>", slot("a"), slot("b"), "</p>"])
        self.assertEqual(stream.strings, ("<p>", "", "</p>"))

    def test_leading_and_trailing_slots(self):
        stream = normalize_stream([slot("a"), "x", slot("b")])
        self.assertEqual(stream.strings, ("", "x", ""))
        self.assertEqual(len(stream.slots), 2)

    def test_empty_input(self):
        stream = normalize_stream([])
        self.assertEqual(stream.strings, ("",))
        self.assertEqual(stream.slots, [])

    def test_renormalizing_is_stable(self):
        stream = normalize_stream([slot("a"), slot("b"), "tail"])
        again = normalize_stream(stream.items())
        self.assertEqual(again.strings, stream.strings)
        self.assertEqual(again.slots, stream.slots)

    def test_arity_holds(self):
        for items in ([], ["a"], [slot("x")], ["a", slot("x"), slot("y"), "b", "c"]):
            stream = normalize_stream(items)
            self.assertEqual(len(stream.strings), len(stream.slots) + 1)

    def test_default_stream(self):
        self.assertEqual(CompiledStream().items(), [""])


if __name__ == "__main__":
    unittest.main()
