"""
Conflict detection over a schedule's blocks.

- Same day and overlapping half-open intervals -> conflict.
- Touching endpoints (end == start) is NOT a conflict.
- Same-course overlaps are still reported here (the move validator exempts them).
"""
import unittest
from datetime import time
from types import SimpleNamespace

from app.utils.conflict import conflicting_block_ids, detect_conflicts, overlaps
from app.utils.exceptions import ScheduleValidationError

from helpers import make_block

MON, TUE, WED = 1, 2, 3


def pair_ids(conflicts):
    return [(c.block_a.id, c.block_b.id) for c in conflicts]


class TestOverlaps(unittest.TestCase):
    def test_symmetric(self):
        cases = [
            (MON, "09:00", "10:30", MON, "10:00", "11:00"),
            (MON, "09:00", "10:00", MON, "10:00", "11:00"),
            (MON, "09:00", "12:00", MON, "10:00", "11:00"),
            (MON, "09:00", "10:00", TUE, "09:00", "10:00"),
        ]
        for da, sa, ea, db, sb, eb in cases:
            with self.subTest(a=(da, sa, ea), b=(db, sb, eb)):
                self.assertEqual(
                    overlaps(da, sa, ea, db, sb, eb),
                    overlaps(db, sb, eb, da, sa, ea),
                )

    def test_half_open_boundary(self):
        self.assertFalse(overlaps(MON, "09:00", "10:00", MON, "10:00", "11:00"))
        self.assertTrue(overlaps(MON, "09:00", "10:00:01", MON, "10:00", "11:00"))

    def test_different_day(self):
        self.assertFalse(overlaps(MON, "09:00", "10:00", TUE, "09:00", "10:00"))

    def test_mixed_time_representations(self):
        self.assertTrue(overlaps(MON, time(9), "10:30:00", MON, "10:00", time(11)))


class TestDetectConflicts(unittest.TestCase):
    def setUp(self):
        self.cs101 = make_block(1, "CS101", MON, "09:00", "10:30")
        self.math20 = make_block(2, "MATH20", MON, "10:00", "11:00")

    def test_scenario_single_overlap(self):
        conflicts = detect_conflicts([self.cs101, self.math20])
        self.assertEqual(len(conflicts), 1)
        c = conflicts[0]
        self.assertEqual({c.block_a.course_code, c.block_b.course_code}, {"CS101", "MATH20"})
        self.assertEqual(c.overlap_start, time(10, 0))
        self.assertEqual(c.overlap_end, time(10, 30))
        self.assertEqual(c.day_of_week, MON)
        self.assertEqual(c.message, "CS101 and MATH20 overlap on Monday 10:00-10:30")

    def test_touching_blocks_do_not_conflict(self):
        blocks = [
            make_block(1, "A", MON, "09:00", "10:00"),
            make_block(2, "B", MON, "10:00", "11:00"),
        ]
        self.assertEqual(detect_conflicts(blocks), [])

    def test_never_pairs_block_with_itself(self):
        conflicts = detect_conflicts([self.cs101, self.cs101, self.math20])
        for c in conflicts:
            self.assertNotEqual(c.block_a.id, c.block_b.id)
        self.assertEqual(pair_ids(conflicts), [(1, 2)])

    def test_order_independent_and_idempotent(self):
        blocks = [
            self.cs101,
            self.math20,
            make_block(3, "PHYS1", MON, "10:15", "12:00"),
            make_block(4, "ENG5", WED, "13:00", "14:00"),
            make_block(5, "HIST2", WED, "13:30", "15:00"),
        ]
        first = pair_ids(detect_conflicts(blocks))
        again = pair_ids(detect_conflicts(blocks))
        reversed_ = pair_ids(detect_conflicts(list(reversed(blocks))))
        self.assertEqual(first, again)
        self.assertEqual(first, reversed_)
        self.assertEqual(len(first), 4)

    def test_same_course_overlap_is_reported(self):
        blocks = [
            make_block(1, "CS101", MON, "09:00", "10:00"),
            make_block(2, "CS101", MON, "09:30", "10:30"),
        ]
        self.assertEqual(pair_ids(detect_conflicts(blocks)), [(1, 2)])

    def test_different_days_do_not_conflict(self):
        blocks = [
            make_block(1, "CS101", MON, "09:00", "10:00"),
            make_block(2, "CS101", WED, "09:00", "10:00"),
        ]
        self.assertEqual(detect_conflicts(blocks), [])

    def test_input_not_mutated(self):
        blocks = [self.math20, self.cs101]
        detect_conflicts(blocks)
        self.assertEqual([b.id for b in blocks], [2, 1])
        self.assertEqual(self.math20.start_time, time(10, 0))

    def test_invalid_day_raises(self):
        bad = SimpleNamespace(id=9, course_code="X", day_of_week=9, start_time="09:00", end_time="10:00")
        with self.assertRaises(ScheduleValidationError):
            detect_conflicts([self.cs101, bad])

    def test_conflicting_block_ids(self):
        blocks = [self.cs101, self.math20, make_block(3, "ENG5", TUE, "09:00", "10:00")]
        self.assertEqual(conflicting_block_ids(detect_conflicts(blocks)), {1, 2})


if __name__ == "__main__":
    unittest.main()
