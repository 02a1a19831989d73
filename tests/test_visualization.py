import io
import unittest

import numpy as np

from falling_blocks.game import GameConfig, Grid
from falling_blocks.visualization import TextRenderer, TextScoreReporter, format_grid, grid_to_rgb
from falling_blocks.visualization.autoplay import build_parser, scaled_config


class TestTextOutput(unittest.TestCase):
    def test_given_grid_when_formatting_then_filled_and_empty_glyphs(self):
        grid = Grid.from_matrix([[0, 3], [1, 0]])
        self.assertEqual(format_grid(grid), "·█\n█·")

    def test_given_cleared_rows_when_flashing_then_rows_marked(self):
        stream = io.StringIO()
        renderer = TextRenderer(stream)
        renderer.render_grid(Grid.from_matrix([[0, 0], [1, 1]]))
        renderer.flash_rows([1])
        self.assertIn("··\n==", stream.getvalue())

    def test_given_game_over_when_filling_then_future_already_done(self):
        renderer = TextRenderer(io.StringIO())
        renderer.render_grid(Grid.create(2, 2))
        self.assertTrue(renderer.fill_animation().done())

    def test_given_score_when_reported_then_line_printed(self):
        stream = io.StringIO()
        TextScoreReporter(stream).render(90, 1, 3)
        self.assertEqual(stream.getvalue(), "Score: 90  Level: 1  Lines: 3\n")


class TestRgbFrames(unittest.TestCase):
    def test_given_palette_when_painting_then_cells_take_their_colour(self):
        config = GameConfig()
        grid = Grid.from_matrix([[0, 2]])
        img = grid_to_rgb(grid, config.palette_rgb(), cell_size=2)
        self.assertEqual(img.shape, (2, 4, 3))
        self.assertEqual(tuple(img[0, 0]), (0x16, 0x1F, 0x27))
        self.assertEqual(tuple(img[1, 3]), (0x04, 0x7C, 0x51))

    def test_given_index_past_palette_when_painting_then_grey(self):
        img = grid_to_rgb(np.array([[12]], dtype=np.int8), ((0, 0, 0), (255, 0, 0)), cell_size=1)
        self.assertEqual(tuple(img[0, 0]), (200, 200, 200))


class TestAutoplaySettings(unittest.TestCase):
    def test_given_speed_factor_when_scaling_then_intervals_divided(self):
        config = scaled_config(GameConfig(levels=((0, 800), (10, 3))), 4.0)
        self.assertEqual(config.levels, ((0, 200), (10, 1)))
        with self.assertRaises(ValueError):
            scaled_config(GameConfig(), 0)

    def test_given_flags_when_parsing_then_values_read(self):
        args = build_parser().parse_args(["--mode", "hard", "--seed", "3", "--command_ms", "50"])
        self.assertEqual((args.mode, args.seed, args.command_ms), ("hard", 3, 50))


if __name__ == "__main__":
    unittest.main()
