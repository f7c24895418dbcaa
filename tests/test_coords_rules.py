import unittest

from dasgrid import (
    Grid,
    MoveDirection,
    MOVE_DOWN,
    MOVE_RIGHT,
    OutOfBounds,
    RuleFailed,
    GridError,
    check_bounds,
    check_rules,
    forbid_values,
    from_index,
    in_bounds,
    require_value,
    to_index,
)


def rule_not_1(coord, value):
    if value == 1:
        raise RuleFailed(coord, value)


class TestCoords(unittest.TestCase):
    def test_given_dims_when_checking_bounds_then_edges_inclusive_exclusive(self):
        dims = (2, 3)
        check_bounds((0, 0), dims)
        check_bounds((1, 2), dims)
        for bad in [(2, 0), (0, 3), (-1, 0), (0, -1)]:
            self.assertFalse(in_bounds(bad, dims))
            with self.assertRaises(OutOfBounds):
                check_bounds(bad, dims)

    def test_given_all_coords_when_mapping_index_then_bijection(self):
        dims = (3, 4)
        seen = set()
        for r in range(3):
            for c in range(4):
                idx = to_index((r, c), dims)
                self.assertEqual(from_index(idx, dims), (r, c))
                seen.add(idx)
        self.assertEqual(seen, set(range(12)))
        self.assertEqual(to_index((1, 2), dims), 6)

    def test_given_directions_when_applied_then_unit_offsets(self):
        self.assertEqual(MoveDirection.UP.apply((1, 1)), (0, 1))
        self.assertEqual(MoveDirection.DOWN.apply((1, 1)), (2, 1))
        self.assertEqual(MoveDirection.LEFT.apply((1, 1)), (1, 0))
        self.assertEqual(MoveDirection.RIGHT.apply((1, 1)), (1, 2))
        self.assertEqual(MoveDirection.RIGHT.offset, MOVE_RIGHT)
        self.assertEqual(MoveDirection.DOWN.offset, MOVE_DOWN)
        self.assertEqual(str(MoveDirection.RIGHT), 'Right (0, 1)')

    def test_given_direction_names_when_parsing_then_case_insensitive(self):
        self.assertIs(MoveDirection.parse('up'), MoveDirection.UP)
        self.assertIs(MoveDirection.parse(' Left '), MoveDirection.LEFT)
        with self.assertRaises(ValueError):
            MoveDirection.parse('diagonal')


class TestRules(unittest.TestCase):
    def test_given_rules_when_checked_then_first_failure_wins(self):
        calls = []

        def ok(coord, value):
            calls.append('ok')

        def bad(coord, value):
            calls.append('bad')
            raise OutOfBounds(coord, (0, 0))

        def never(coord, value):
            calls.append('never')

        with self.assertRaises(OutOfBounds):
            check_rules([ok, bad, never], (0, 0), 1)
        self.assertEqual(calls, ['ok', 'bad'])

    def test_given_rule_returning_false_when_checked_then_rule_failed(self):
        with self.assertRaises(RuleFailed) as ctx:
            check_rules([lambda coord, value: value > 0], (1, 1), 0)
        self.assertEqual(ctx.exception.coord, (1, 1))
        self.assertEqual(ctx.exception.value, 0)
        check_rules([lambda coord, value: None, lambda coord, value: True], (0, 0), 0)
        check_rules([], (0, 0), 0)

    def test_given_rule_returning_other_falsy_when_checked_then_rule_failed(self):
        for falsy in (0, '', [], 0.0):
            with self.assertRaises(RuleFailed):
                check_rules([lambda coord, value, res=falsy: res], (0, 0), 1)
        check_rules([lambda coord, value: 1, lambda coord, value: 'ok'], (0, 0), 1)

    def test_given_value_returning_rule_when_set_with_rules_then_zero_rejected(self):
        g = Grid((2, 2), (1.0, 1.0), 9)
        with self.assertRaises(RuleFailed):
            g.set_with_rules((0, 0), 0, [lambda coord, value: value])
        self.assertEqual(g.get((0, 0)), 9)
        g.set_with_rules((0, 0), 3, [lambda coord, value: value])
        self.assertEqual(g.get((0, 0)), 3)

    def test_given_factories_when_checked_then_accept_and_reject(self):
        check_rules([forbid_values(1, 2)], (0, 0), 3)
        with self.assertRaises(RuleFailed):
            check_rules([forbid_values(1, 2)], (0, 0), 2)
        check_rules([require_value(0)], (0, 0), 0)
        with self.assertRaises(RuleFailed):
            check_rules([require_value(0)], (0, 0), 5)

    def test_given_set_with_rules_when_rule_fails_then_cell_unchanged(self):
        g = Grid((2, 2), (1.0, 1.0), 0)
        g.set((0, 1), 1)
        with self.assertRaises(RuleFailed):
            g.set_with_rules((0, 1), 1, [rule_not_1])
        with self.assertRaises(RuleFailed):
            g.set_with_rules((1, 1), 7, [lambda coord, value: False])
        self.assertEqual(g.get((1, 1)), 0)
        g.set_with_rules((1, 1), 7, [rule_not_1])
        self.assertEqual(g.get((1, 1)), 7)

    def test_given_set_with_rules_when_out_of_bounds_then_out_of_bounds(self):
        g = Grid((2, 2), (1.0, 1.0), 0)
        with self.assertRaises(OutOfBounds):
            g.set_with_rules((3, 3), 2, [rule_not_1])

    def test_given_move_with_rules_when_dst_rejected_then_both_cells_untouched(self):
        g = Grid((2, 2), (1.0, 1.0), 0)
        g.set((0, 1), 1)
        g.set((0, 0), 2)
        with self.assertRaises(RuleFailed):
            g.move_with_rules((0, 0), (0, 1), [rule_not_1])
        self.assertEqual(g.get((0, 0)), 2)
        self.assertEqual(g.get((0, 1)), 1)
        g.move_with_rules((0, 0), (1, 0), [rule_not_1])
        self.assertEqual(g.get((1, 0)), 2)
        self.assertEqual(g.get((0, 0)), 0)

    def test_given_move_with_rules_when_out_of_bounds_then_rules_not_run(self):
        g = Grid((2, 2), (1.0, 1.0), 0)
        calls = []
        with self.assertRaises(OutOfBounds):
            g.move_with_rules((0, 0), (0, 5), [lambda coord, value: calls.append(coord)])
        self.assertEqual(calls, [])

    def test_given_direction_with_rules_when_dst_rejected_then_error(self):
        g = Grid((2, 2), (1.0, 1.0), 0)
        g.set((0, 1), 1)
        with self.assertRaises(RuleFailed):
            g.move_by_direction_with_rules((1, 1), MoveDirection.UP, [rule_not_1])
        with self.assertRaises(OutOfBounds):
            g.move_by_direction_with_rules((0, 1), MoveDirection.UP, [rule_not_1])
        dst = g.move_by_direction_with_rules((0, 1), MoveDirection.DOWN, [require_value(0)])
        self.assertEqual(dst, (1, 1))
        self.assertEqual(g.get_flattened(), [0, 0, 0, 1])

    def test_given_errors_when_caught_then_share_base_class(self):
        for exc in (OutOfBounds((0, 0), (1, 1)), RuleFailed((0, 0), 1)):
            self.assertIsInstance(exc, GridError)


if __name__ == '__main__':
    unittest.main(verbosity=2)
