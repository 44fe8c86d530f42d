"""Tests for wildlife scoring cards."""

import pytest

from cascadia_engine.data.models import Animal, GridKind, ScoringMode
from cascadia_engine.errors import InvalidConfig
from cascadia_engine.scoring.cards import make_scorer, registered_cards, scorers_for
from cascadia_engine.scoring.wildlife import capped_lookup

BEAR = Animal.BEAR
SALMON = Animal.SALMON
FOX = Animal.FOX
ELK = Animal.ELK
BUZZARD = Animal.BUZZARD


def score(board, animal, pattern) -> int:
    return make_scorer(animal, pattern).score_board(board)


class TestRegistry:
    def test_all_cards_registered(self):
        cards = registered_cards()
        assert len(cards) == 22
        for animal in Animal:
            for pattern in range(1, 5):
                assert (animal, pattern) in cards

    @pytest.mark.parametrize(
        "animal, pattern", [(BEAR, 0), (ELK, 5), (None, 1), (None, 7)]
    )
    def test_bad_cards(self, animal, pattern):
        with pytest.raises(InvalidConfig):
            make_scorer(animal, pattern)

    def test_cards_mode_needs_every_species(self):
        with pytest.raises(InvalidConfig):
            scorers_for(ScoringMode.CARDS, {BEAR: 1})

    def test_modes(self):
        assert [s.name for s in scorers_for(ScoringMode.FAMILY)] == ["Family"]
        cards = {a: 2 for a in Animal}
        assert len(scorers_for(ScoringMode.CARDS, cards)) == 5

    @pytest.mark.parametrize("key", registered_cards())
    def test_empty_board_scores_nothing(self, key, make_board):
        board = make_board({(5, 5): None}, GridKind.HEX)
        assert score(board, *key) == 0


def test_capped_lookup():
    table = {2: 5, 3: 8}
    assert capped_lookup(table, 1) == 0
    assert capped_lookup(table, 3) == 8
    assert capped_lookup(table, 9) == 8


class TestBear:
    layout = {
        (0, 0): BEAR,
        (3, 0): BEAR,
        (4, 0): BEAR,
        (0, 3): BEAR,
        (1, 3): BEAR,
        (2, 3): BEAR,
        (5, 5): BEAR,
        (6, 5): BEAR,
        (7, 5): BEAR,
        (8, 5): BEAR,
    }

    def test_hex_pair(self, make_board):
        board = make_board({(10, 10): BEAR, (11, 10): BEAR}, GridKind.HEX)
        assert score(board, BEAR, 1) == 11
        assert score(board, BEAR, 2) == 0

    def test_group_sizes(self, make_board):
        board = make_board(self.layout)
        assert score(board, BEAR, 1) == 4 + 11 + 19 + 20

    def test_triples(self, make_board):
        board = make_board(self.layout)
        assert score(board, BEAR, 2) == 10

    def test_mixed_sizes_bonus(self, make_board):
        board = make_board(self.layout)
        assert score(board, BEAR, 3) == 2 + 5 + 8 + 3
        del_single = {c: a for c, a in self.layout.items() if c != (0, 0)}
        assert score(make_board(del_single), BEAR, 3) == 5 + 8

    def test_large_groups(self, make_board):
        board = make_board(self.layout)
        assert score(board, BEAR, 4) == 5 + 8 + 13


class TestSalmon:
    def test_run_of_four(self, make_board):
        board = make_board({(x, 0): SALMON for x in range(4)})
        assert score(board, SALMON, 1) == 12
        assert score(board, SALMON, 2) == 11
        assert score(board, SALMON, 3) == 12
        assert score(board, SALMON, 4) == 5

    def test_long_run_is_capped(self, make_board):
        board = make_board({(x, 0): SALMON for x in range(9)})
        assert score(board, SALMON, 1) == 25
        assert score(board, SALMON, 2) == 17
        assert score(board, SALMON, 3) == 15

    def test_branching_group_scores_nothing(self, make_board):
        board = make_board({c: SALMON for c in [(1, 0), (0, 1), (1, 1), (2, 1)]})
        for pattern in range(1, 5):
            assert score(board, SALMON, pattern) == 0

    def test_short_run_on_minimum_card(self, make_board):
        board = make_board({(0, 0): SALMON, (1, 0): SALMON})
        assert score(board, SALMON, 3) == 0

    def test_run_neighbours(self, make_board):
        board = make_board(
            {
                (0, 0): SALMON,
                (1, 0): SALMON,
                (0, 1): BEAR,
                (1, 1): FOX,
                (2, 0): BEAR,
            }
        )
        # two bears on separate tiles both count
        assert score(board, SALMON, 4) == 2 + 1 + 3

    def test_run_neighbour_counted_once(self, make_board):
        board = make_board(
            {(0, 0): SALMON, (1, 0): SALMON, (1, 1): SALMON, (0, 1): BEAR}
        )
        assert score(board, SALMON, 4) == 3 + 1 + 1


class TestFox:
    def test_distinct_neighbours(self, make_board):
        board = make_board({(5, 5): FOX, (5, 4): BEAR, (6, 5): SALMON, (5, 6): ELK})
        assert score(board, FOX, 1) == 4
        assert score(board, FOX, 2) == 0
        assert score(board, FOX, 3) == 1

    def test_lone_fox(self, make_board):
        board = make_board({(5, 5): FOX})
        assert score(board, FOX, 1) == 1
        assert score(board, FOX, 3) == 0

    def test_all_species_around(self, make_board):
        board = make_board(
            {
                (10, 10): FOX,
                (10, 9): BEAR,
                (11, 10): SALMON,
                (10, 11): ELK,
                (11, 11): BUZZARD,
                (9, 10): BEAR,
            },
            GridKind.HEX,
        )
        assert score(board, FOX, 1) == 5

    def test_neighbour_pairs(self, make_board):
        board = make_board(
            {(5, 5): FOX, (5, 4): BEAR, (6, 5): BEAR, (5, 6): ELK, (4, 5): ELK}
        )
        assert score(board, FOX, 2) == 5
        assert score(board, FOX, 3) == 2

    def test_most_common(self, make_board):
        board = make_board({(5, 5): FOX, (5, 4): BEAR, (6, 5): BEAR, (5, 6): BEAR})
        assert score(board, FOX, 3) == 3

    def test_each_fox_scores_its_own_pairs(self, make_board):
        board = make_board(
            {
                (5, 5): FOX,
                (6, 5): FOX,
                (5, 4): BEAR,
                (5, 6): BEAR,
                (6, 4): ELK,
                (6, 6): ELK,
                (20, 20): FOX,
                (20, 19): SALMON,
                (21, 20): SALMON,
            }
        )
        assert score(board, FOX, 4) == 5 + 5 + 5

    def test_lone_fox_with_three_pairs(self, make_board):
        board = make_board(
            {
                (10, 10): FOX,
                (11, 9): BEAR,
                (11, 10): BEAR,
                (11, 11): ELK,
                (10, 11): ELK,
                (9, 10): SALMON,
                (10, 9): SALMON,
            },
            GridKind.HEX,
        )
        assert score(board, FOX, 2) == 7
        assert score(board, FOX, 4) == 9

    def test_foxes_dont_pair_with_foxes(self, make_board):
        board = make_board({(5, 5): FOX, (6, 5): FOX, (7, 5): FOX})
        assert score(board, FOX, 4) == 0


class TestElk:
    def test_lines(self, make_board):
        board = make_board(
            {
                (0, 0): ELK,
                (1, 0): ELK,
                (2, 0): ELK,
                (10, 10): ELK,
                (10, 11): ELK,
                (20, 20): ELK,
                (21, 21): ELK,
            }
        )
        assert score(board, ELK, 1) == 9 + 2 + 2 + 5

    @pytest.mark.parametrize(
        "cells, expected",
        [
            ([(0, 0), (1, 0)], 5),
            ([(10, 10), (10, 11)], 4),
            ([(5, 4), (5, 5), (6, 5)], 9),
            ([(4, 5), (5, 5), (6, 5), (6, 6)], 13),
        ],
    )
    def test_shapes(self, make_board, cells, expected):
        board = make_board({c: ELK for c in cells})
        assert score(board, ELK, 2) == expected

    def test_herds(self, make_board):
        board = make_board({(0, 0): ELK, (1, 0): ELK, (1, 1): ELK})
        assert score(board, ELK, 3) == 7
        board = make_board({(x, 5): ELK for x in range(8)})
        assert score(board, ELK, 3) == 28

    def test_oversized_groups_score_nothing(self, make_board):
        board = make_board({(x, 5): ELK for x in range(9)})
        assert score(board, ELK, 3) == 0
        assert score(board, ELK, 1) == 0

    def test_companions(self, make_board):
        plus = {(5, 5): ELK, (5, 4): ELK, (6, 5): ELK, (5, 6): ELK, (4, 5): ELK}
        plus[(20, 20)] = ELK
        board = make_board(plus)
        assert score(board, ELK, 4) == 12 + 4 * 2


class TestBuzzard:
    def test_single(self, make_board):
        board = make_board({(5, 5): BUZZARD})
        assert score(board, BUZZARD, 1) == 2

    def test_hex_row_sight_line(self, make_board):
        board = make_board(
            {(2, 4): BUZZARD, (3, 4): BEAR, (4, 4): BUZZARD}, GridKind.HEX
        )
        assert score(board, BUZZARD, 1) == 5
        assert score(board, BUZZARD, 2) == 2
        assert score(board, BUZZARD, 3) == 3
        assert score(board, BUZZARD, 4) == 1

    def test_hex_diagonal(self, make_board):
        board = make_board({(10, 10): BUZZARD, (11, 12): BUZZARD}, GridKind.HEX)
        assert score(board, BUZZARD, 3) == 3

    def test_empty_cells_dont_block(self, make_board):
        board = make_board({(2, 4): BUZZARD, (5, 4): BUZZARD})
        assert score(board, BUZZARD, 3) == 3
        assert score(board, BUZZARD, 4) == 0

    def test_buzzard_blocks(self, make_board):
        board = make_board({(0, 0): BUZZARD, (2, 0): BUZZARD, (4, 0): BUZZARD})
        assert score(board, BUZZARD, 3) == 6

    def test_adjacent_buzzards(self, make_board):
        board = make_board({(0, 0): BUZZARD, (1, 0): BUZZARD})
        assert score(board, BUZZARD, 1) == 0
        assert score(board, BUZZARD, 2) == 0


class TestFamilies:
    def test_elk_triangle(self, make_board):
        board = make_board({(10, 10): ELK, (11, 10): ELK, (11, 11): ELK}, GridKind.HEX)
        assert score(board, None, 5) == 9
        assert score(board, None, 6) == 8

    def test_mixed_species(self, make_board):
        board = make_board({(0, 0): BEAR, (1, 0): BEAR, (5, 5): FOX})
        assert score(board, None, 5) == 5 + 2
        assert score(board, None, 6) == 5

    def test_big_group(self, make_board):
        board = make_board({(x, 0): SALMON for x in range(5)})
        assert score(board, None, 5) == 9
        assert score(board, None, 6) == 12

    def test_groups_add_up(self, make_board):
        board = make_board({(0, 0): BEAR, (1, 0): BEAR, (5, 5): FOX, (6, 5): FOX})
        assert score(board, None, 6) == 10
