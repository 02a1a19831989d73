import unittest

from falling_blocks.game import GameMode, Grid, PieceCatalog, arrange_figures


class TestArrangeFigures(unittest.TestCase):
    def test_given_easy_catalog_when_arranged_then_three_by_three_slots(self):
        figures = PieceCatalog(GameMode.EASY).available_figures()
        sheet = arrange_figures(figures)
        # Slots are 4x2 with a one cell gap, three per row
        self.assertEqual(sheet.shape, (8, 14))
        self.assertEqual(sheet.occupied, sum(f.occupied for f in figures))

    def test_given_figures_when_arranged_then_each_lands_in_its_slot(self):
        a = Grid.from_matrix([[1, 1]])
        b = Grid.from_matrix([[2], [2]])
        sheet = arrange_figures([a, b])
        self.assertEqual(sheet.to_list(), [
            [1, 1, 0, 2, 0],
            [0, 0, 0, 2, 0],
        ])

    def test_given_no_figures_when_arranged_then_empty_grid(self):
        self.assertEqual(arrange_figures([]).shape, (0, 0))


if __name__ == "__main__":
    unittest.main()
