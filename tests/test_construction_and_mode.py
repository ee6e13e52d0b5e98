from __future__ import annotations

import copy
import pickle
import unittest


class ConstructionTests(unittest.TestCase):
    def test_from_sequence_and_mapping(self) -> None:
        from jsarray import JsArray

        numeric = JsArray.from_([1, 2, 3])
        self.assertEqual(numeric.to_array(), [1, 2, 3])
        self.assertEqual(numeric.length, 3)
        self.assertFalse(numeric.is_mutable)
        self.assertTrue(numeric.is_immutable)

        assoc = JsArray.from_({"a": 1, "b": 2, "c": 3})
        self.assertEqual(assoc.to_array(), {"a": 1, "b": 2, "c": 3})
        self.assertEqual(assoc.length, 3)

    def test_from_empty_and_none(self) -> None:
        from jsarray import JsArray

        for source in ([], {}, (), None):
            with self.subTest(source=source):
                arr = JsArray.from_(source)
                self.assertEqual(arr.to_array(), [])
                self.assertEqual(arr.length, 0)

    def test_from_keeps_mixed_values(self) -> None:
        from jsarray import JsArray

        arr = JsArray.from_([1, "two", 3.0, True, None])
        self.assertEqual(arr.to_array(), [1, "two", 3.0, True, None])

    def test_integer_keys_covering_range_are_renumbered_in_order(self) -> None:
        from jsarray import JsArray

        arr = JsArray.from_({1: "a", 0: "b", 2: "c"})
        self.assertEqual(arr.to_array(), ["a", "b", "c"])
        self.assertTrue(arr.is_sequential)

        sparse = JsArray.from_({0: "a", 5: "b"})
        self.assertEqual(sparse.to_array(), {0: "a", 5: "b"})
        self.assertFalse(sparse.is_sequential)

    def test_from_generator_and_other_container(self) -> None:
        from jsarray import JsArray

        self.assertEqual(JsArray.from_(n * n for n in range(4)).to_array(), [0, 1, 4, 9])
        source = JsArray.from_({"x": 1})
        copied = JsArray.from_(source)
        self.assertIsNot(copied, source)
        self.assertEqual(copied.to_array(), {"x": 1})

    def test_from_string_is_rejected(self) -> None:
        from jsarray import JsArray, JsArrayTypeError

        with self.assertRaises(JsArrayTypeError):
            JsArray.from_("abc")

    def test_from_rejects_keys_outside_int_and_str(self) -> None:
        from jsarray import JsArray, JsArrayTypeError

        for source in ({-1: "a"}, {1.5: "a"}, {True: "a"}, {None: "a"}, {(0, 1): "a"}):
            with self.subTest(source=source):
                with self.assertRaises(JsArrayTypeError):
                    JsArray.from_(source)

    def test_canonical_integer_strings_become_int_keys(self) -> None:
        from jsarray import JsArray

        self.assertEqual(JsArray.from_({"0": "x"}).to_array(), ["x"])
        arr = JsArray.from_({"a": 1, "3": 2, "03": 3, "-1": 4})
        self.assertEqual(arr.to_array(), {"a": 1, 3: 2, "03": 3, "-1": 4})
        self.assertEqual(arr["3"], 2)
        self.assertTrue(arr.has("3"))
        self.assertEqual(arr.get(3), 2)

        mutable = JsArray.mutable([])
        mutable["0"] = "first"
        self.assertEqual(mutable.to_array(), ["first"])

    def test_of(self) -> None:
        from jsarray import JsArray

        self.assertEqual(JsArray.of(1, 2, 3, 4, 5).to_array(), [1, 2, 3, 4, 5])
        self.assertEqual(JsArray.of().to_array(), [])
        self.assertTrue(JsArray.of(1).is_immutable)

    def test_mutable_factories_and_constructor_flag(self) -> None:
        from jsarray import JsArray

        self.assertTrue(JsArray.mutable([1, 2, 3]).is_mutable)
        self.assertFalse(JsArray.mutable([1, 2, 3]).is_immutable)
        self.assertTrue(JsArray.create_mutable([1, 2, 3]).is_mutable)
        self.assertTrue(JsArray([1, 2, 3], True).is_mutable)
        self.assertFalse(JsArray([1, 2, 3], False).is_mutable)
        self.assertFalse(JsArray([1, 2, 3]).is_mutable)


class ModeConversionTests(unittest.TestCase):
    def test_to_immutable_returns_new_instance(self) -> None:
        from jsarray import JsArray

        mutable = JsArray.mutable([1, 2, 3])
        immutable = mutable.to_immutable()
        self.assertIsNot(immutable, mutable)
        self.assertTrue(immutable.is_immutable)
        self.assertEqual(immutable.to_array(), [1, 2, 3])
        self.assertTrue(mutable.is_mutable)

    def test_to_mutable_flips_same_instance(self) -> None:
        from jsarray import JsArray

        arr = JsArray.from_([1, 2, 3])
        same = arr.to_mutable()
        self.assertIs(same, arr)
        self.assertTrue(arr.is_mutable)
        self.assertEqual(arr.to_array(), [1, 2, 3])

    def test_copies_leave_original_mode(self) -> None:
        from jsarray import JsArray

        original = JsArray.from_([1, 2, 3])
        mutable_copy = original.get_mutable_copy()
        self.assertTrue(mutable_copy.is_mutable)
        self.assertFalse(original.is_mutable)
        mutable_copy.push(4)
        self.assertEqual(original.to_array(), [1, 2, 3])

        source = JsArray.mutable([1, 2, 3])
        immutable_copy = source.get_immutable_copy()
        self.assertFalse(immutable_copy.is_mutable)
        self.assertEqual(immutable_copy.to_array(), [1, 2, 3])
        self.assertTrue(source.is_mutable)


class AttributeGuardTests(unittest.TestCase):
    def test_unknown_attribute_read_raises_invalid_access(self) -> None:
        from jsarray import InvalidAccessError, JsArray

        arr = JsArray.from_([1, 2, 3])
        with self.assertRaises(InvalidAccessError):
            arr.undefined
        with self.assertRaises(AttributeError):
            arr.undefined
        self.assertIsNone(getattr(arr, "undefined", None))
        self.assertFalse(hasattr(arr, "undefined"))

    def test_attribute_write_raises_illegal_mutation(self) -> None:
        from jsarray import IllegalMutationError, JsArray

        arr = JsArray.mutable([1, 2, 3])
        with self.assertRaises(IllegalMutationError):
            arr.test = "value"
        with self.assertRaises(RuntimeError):
            arr.length = 10
        with self.assertRaises(IllegalMutationError):
            del arr.length
        self.assertEqual(arr.length, 3)

    def test_copy_and_pickle_preserve_entries_and_mode(self) -> None:
        from jsarray import JsArray

        arr = JsArray.mutable({"a": [1, 2], "b": 3})
        shallow = copy.copy(arr)
        deep = copy.deepcopy(arr)
        restored = pickle.loads(pickle.dumps(arr))
        for clone in (shallow, deep, restored):
            with self.subTest(clone=clone):
                self.assertIsNot(clone, arr)
                self.assertEqual(clone, arr)
                self.assertTrue(clone.is_mutable)
        self.assertIsNot(deep["a"], arr["a"])


if __name__ == "__main__":
    unittest.main()
