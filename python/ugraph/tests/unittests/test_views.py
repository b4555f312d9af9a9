
import unittest

from ugraph.datastructures.graph import Edge
from ugraph.datastructures.views import AdjacencyView


class TestAdjacencyView(unittest.TestCase):
    def test_view_reflects_owner(self):
        adjacency = {"B": Edge("B", 2)}
        view: AdjacencyView[str] = AdjacencyView(adjacency)
        self.assertDictEqual(dict(view), {"B": 2})
        adjacency["C"] = Edge("C", 5)
        adjacency["B"].cost = 7
        self.assertDictEqual(dict(view), {"B": 7, "C": 5})
        self.assertEqual(len(view), 2)

    def test_view_is_read_only(self):
        view: AdjacencyView[str] = AdjacencyView({"B": Edge("B", 2)})
        with self.assertRaises(TypeError):
            view["B"] = 3  # type: ignore
        with self.assertRaises(AttributeError):
            view.pop("B")  # type: ignore

    def test_contains(self):
        view: AdjacencyView[str] = AdjacencyView({"B": Edge("B", 2)})
        self.assertIn("B", view)
        self.assertNotIn("C", view)
        self.assertNotIn(["B"], view)

    def test_repr(self):
        view: AdjacencyView[str] = AdjacencyView({"B": Edge("B", 2)})
        self.assertEqual(repr(view), "AdjacencyView({'B': 2})")


if __name__ == "__main__":
    unittest.main()
