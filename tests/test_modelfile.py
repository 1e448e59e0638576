import io
import unittest

from markvshaney import modelfile
from markvshaney.chain import Chain, tokenize
from markvshaney.errors import InvalidFormat


def sample_chain(prefix_len=1, text="a b a b a c"):
    chain = Chain(prefix_len)
    chain.build(tokenize(text))
    return chain


class TestSerialize(unittest.TestCase):
    def test_lines(self):
        lines = list(modelfile.iter_lines(sample_chain()))
        self.assertEqual(lines[0], "1\n")
        self.assertCountEqual(lines[1:], ['"" a 1 \n', "a b 2 c 1 \n", "b a 2 \n"])

    def test_leading_empty_tokens_are_quoted_one_by_one(self):
        text = modelfile.dumps(sample_chain(3, "x y"))
        self.assertIn('"" "" "" x 1 \n', text)
        self.assertIn('"" "" x y 1 \n', text)

    def test_dump_to_stream(self):
        fp = io.StringIO()
        chain = sample_chain()
        modelfile.dump(chain, fp)
        self.assertEqual(fp.getvalue(), modelfile.dumps(chain))


class TestDeserialize(unittest.TestCase):
    def test_round_trip(self):
        for prefix_len in (1, 2, 3):
            chain = sample_chain(prefix_len, "the quick brown fox jumps over the lazy dog and the quick cat")
            self.assertEqual(modelfile.loads(modelfile.dumps(chain)), chain)

    def test_end_to_end_table(self):
        chain = modelfile.loads(modelfile.dumps(sample_chain()))
        self.assertEqual(chain.model, {"": {"a": 1}, "a": {"b": 2, "c": 1}, "b": {"a": 2}})

    def test_empty_tokens_come_back_empty(self):
        chain = modelfile.loads('2\n"" "" hello 1 \n"" hello world 1 \n')
        self.assertEqual(chain.lookup(" "), {"hello": 1})
        self.assertEqual(chain.lookup(" hello"), {"world": 1})

    def test_read_into_existing_chain(self):
        chain = Chain(1)
        modelfile.read_modelfile(chain, ["1", "a b 2 ", "b a 1 "])
        self.assertEqual(chain.model, {"a": {"b": 2}, "b": {"a": 1}})

    def test_last_duplicate_line_wins(self):
        chain = modelfile.loads("1\na b 1 \na c 4 \n")
        self.assertEqual(chain.lookup("a"), {"c": 4})

    def test_missing_trailing_space_and_blank_lines(self):
        chain = modelfile.loads("1\na b 1\n\nb a 3\r\n")
        self.assertEqual(chain.model, {"a": {"b": 1}, "b": {"a": 3}})

    def test_prefix_without_suffixes(self):
        chain = modelfile.loads("1\na \n")
        self.assertEqual(chain.lookup("a"), {})


class TestInvalidFormat(unittest.TestCase):
    def assertInvalid(self, text, line_number):
        with self.assertRaises(InvalidFormat) as cm:
            modelfile.loads(text)
        self.assertEqual(cm.exception.line_number, line_number)

    def test_empty_file(self):
        self.assertInvalid("", 1)

    def test_bad_header(self):
        self.assertInvalid("two\na b 1 \n", 1)
        self.assertInvalid("0\na b 1 \n", 1)
        self.assertInvalid("-1\na b 1 \n", 1)
        self.assertInvalid("\u00b2\na b 1 \n", 1)
        self.assertInvalid("\u0663\na b 1 \n", 1)

    def test_bad_frequency(self):
        self.assertInvalid("1\na b 1 \nb a x \n", 3)
        self.assertInvalid("1\na b 0 \n", 2)
        self.assertInvalid("1\na b -2 \n", 2)
        self.assertInvalid("1\na b \u00b2 \n", 2)
        self.assertInvalid("1\na b 1 c \u0663 \n", 2)

    def test_dangling_suffix(self):
        self.assertInvalid("1\na b 1 c \n", 2)

    def test_short_line(self):
        self.assertInvalid('3\n"" "" \n', 2)

    def test_prefix_length_mismatch(self):
        with self.assertRaises(InvalidFormat):
            modelfile.read_modelfile(Chain(2), ["1", "a b 1 "])

    def test_failed_load_leaves_chain_untouched(self):
        chain = Chain(1)
        chain.add("z", "z")
        with self.assertRaises(InvalidFormat):
            modelfile.read_modelfile(chain, ["1", "a b 1 ", "b a nope "])
        self.assertEqual(chain.model, {"z": {"z": 1}})


if __name__ == '__main__':
    unittest.main()
