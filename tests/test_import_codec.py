import unittest

from import_codec import (
    BadFieldError,
    BadFormatError,
    ImportStateError,
    decode_import_id,
    encode_import_id,
)


class DecodeImportIdTests(unittest.TestCase):
    def test_three_fields(self):
        record = decode_import_id("5,1,10")
        self.assertEqual(record.id, "5")
        self.assertEqual(record.result, 5)
        self.assertEqual(record.min, 1)
        self.assertEqual(record.max, 10)
        self.assertIsNone(record.seed)
        self.assertEqual(record.keepers, {})

    def test_four_fields_sets_seed(self):
        record = decode_import_id("5,1,10,abc")
        self.assertEqual(record.seed, "abc")
        self.assertEqual(record.result, 5)

    def test_empty_fourth_field_is_empty_seed(self):
        record = decode_import_id("5,1,10,")
        self.assertEqual(record.seed, "")

    def test_id_is_literal_first_field(self):
        record = decode_import_id("+05,1,10")
        self.assertEqual(record.id, "+05")
        self.assertEqual(record.result, 5)

    def test_negative_values(self):
        record = decode_import_id("-3,-10,-1")
        self.assertEqual((record.result, record.min, record.max), (-3, -10, -1))

    def test_five_fields_is_bad_format(self):
        with self.assertRaises(BadFormatError) as ctx:
            decode_import_id("5,1,10,abc,extra")
        self.assertEqual(ctx.exception.summary, "Import Random Integer Error")
        self.assertIn("{result},{min},{max}", ctx.exception.detail)

    def test_two_fields_is_bad_format(self):
        with self.assertRaises(BadFormatError):
            decode_import_id("5,1")

    def test_bad_result_field(self):
        with self.assertRaises(BadFieldError) as ctx:
            decode_import_id("x,1,10")
        error = ctx.exception
        self.assertEqual(error.field, "result")
        self.assertEqual(error.raw, "x")
        self.assertIsInstance(error.__cause__, ValueError)
        self.assertIn("Original Error:", error.detail)

    def test_bad_min_and_max_fields(self):
        with self.assertRaises(BadFieldError) as ctx:
            decode_import_id("5,one,10")
        self.assertEqual(ctx.exception.field, "min")
        self.assertIn("min value", ctx.exception.detail)

        with self.assertRaises(BadFieldError) as ctx:
            decode_import_id("5,1,ten")
        self.assertEqual(ctx.exception.field, "max")

    def test_whitespace_and_underscores_rejected(self):
        for identifier in [" 5,1,10", "5, 1,10", "1_000,1,10000"]:
            with self.assertRaises(BadFieldError):
                decode_import_id(identifier)

    def test_out_of_int64_range_rejected(self):
        with self.assertRaises(BadFieldError) as ctx:
            decode_import_id("9223372036854775808,1,10")
        self.assertIn("out of range", str(ctx.exception.cause))

    def test_errors_share_base_class(self):
        self.assertTrue(issubclass(BadFormatError, ImportStateError))
        self.assertTrue(issubclass(BadFieldError, ImportStateError))

    def test_seed_that_is_not_utf8_is_bad_field(self):
        with self.assertRaises(BadFieldError) as ctx:
            decode_import_id("5,1,10,\udcff")
        self.assertEqual(ctx.exception.field, "seed")
        self.assertIn("not valid UTF-8", ctx.exception.detail)

    def test_result_outside_range_is_accepted(self):
        # Import trusts the supplied result; there is no range check.
        record = decode_import_id("50,1,10")
        self.assertEqual(record.result, 50)


class EncodeImportIdTests(unittest.TestCase):
    def test_without_seed(self):
        self.assertEqual(encode_import_id(decode_import_id("5,1,10")), "5,1,10")

    def test_with_seed(self):
        self.assertEqual(encode_import_id(decode_import_id("5,1,10,abc")), "5,1,10,abc")


if __name__ == "__main__":
    unittest.main()
