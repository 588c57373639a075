import itertools
import random
import unittest

from game import (
    Game,
    IllegalMoveError,
    Move,
    Orientation,
    SaveFormatError,
    parse_command,
    parse_save,
)

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def random_playout(game, rng, stop_after=None):
    """Plays random legal moves, checking the turn rule after each one."""
    played = 0
    while not game.is_over and (stop_after is None or played < stop_after):
        move = rng.choice(game.legal_moves())
        before = game.player_turn
        outcome = game.play(move)
        if outcome.closed:
            assert game.player_turn == before
        else:
            assert game.player_turn == before % game.player_count + 1
        played += 1
    return played


class TestDotsAndBoxesScenarios(unittest.TestCase):
    def test_given_single_box_when_edges_claimed_in_any_order_then_fourth_claimant_wins(self):
        edges = [(0, 0, H), (1, 0, H), (0, 0, V), (0, 1, V)]
        for order in itertools.permutations(edges):
            with self.subTest(order=order):
                game = Game.new(2, 2, 2)
                outcomes = [game.play(Move(*e)) for e in order]
                self.assertEqual([len(o.closed) for o in outcomes], [0, 0, 0, 1])
                self.assertTrue(game.is_over)
                # Three non-closing moves alternate A, B, A, so B claims the fourth
                self.assertEqual(outcomes[-1].player, 'B')
                self.assertEqual(game.winners(), ['B'])

    def test_given_four_by_four_board_when_top_left_edge_claimed_twice_then_second_rejected(self):
        game = Game.new(4, 4, 2)
        game.play(parse_command('0 0 h'))
        with self.assertRaises(IllegalMoveError):
            game.play(parse_command('0 0 h'))
        self.assertEqual(game.board.claimed_edge_count(), 1)
        self.assertEqual(game.current_symbol, 'B')

    def test_given_random_games_when_played_then_complete_iff_all_boxes_scored(self):
        rng = random.Random(1234)
        for height, width, players in [(2, 2, 2), (3, 5, 3), (5, 4, 4), (6, 6, 2)]:
            game = Game.new(height, width, players)
            total = game.board.total_boxes
            while not game.is_over:
                self.assertNotEqual(sum(game.board.tally_scores().values()), total)
                self.assertFalse(game.board.is_complete())
                random_playout(game, rng, stop_after=1)
            self.assertTrue(game.board.is_complete())
            self.assertEqual(sum(game.board.tally_scores().values()), total)
            self.assertEqual(game.board.claimed_edge_count(), game.board.total_edges)
            self.assertTrue(game.winners())

    def test_given_midgame_states_when_saved_and_restored_then_identical(self):
        rng = random.Random(99)
        for stop_after in [0, 3, 10, 20]:
            game = Game.new(4, 5, 3)
            random_playout(game, rng, stop_after=stop_after)
            text = game.save_contents()
            restored = Game.from_save(parse_save(text, 4, 5, 3), 4, 5, 3)
            self.assertEqual(restored.board.grid, game.board.grid)
            self.assertEqual(restored.player_turn, game.player_turn)
            self.assertEqual(restored.save_contents(), text)

    def test_given_long_horizontal_row_when_loading_then_rejected_before_any_board(self):
        text = '1\n1111\n1111\n111\n1111\n111\n1111\n111\n0,0,0\n0,0,0\n0,0,0\n'
        with self.assertRaises(SaveFormatError):
            parse_save(text, 4, 4, 2)


if __name__ == '__main__':
    unittest.main(verbosity=2)
