import unittest

from tempo.lang.store import VariableStore


class VariableStoreTestCase(unittest.TestCase):

    def test_get_set(self):
        store = VariableStore()
        self.assertIsNone(store.get("a"))
        self.assertNotIn("a", store)

        store.set("a", 5)
        store.set("A", -1)
        self.assertEqual(5, store.get("a"))
        self.assertEqual(-1, store.get("A"))  # case-sensitive
        self.assertEqual(2, len(store))

        store.set("a", 0)
        self.assertEqual(0, store.get("a"))
        self.assertIn("a", store)
        self.assertEqual([("a", 0), ("A", -1)], list(store.items()))

    def test_empty_name(self):
        self.assertRaises(ValueError, VariableStore().set, "", 1)


if __name__ == '__main__':
    unittest.main()
