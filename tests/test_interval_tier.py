import unittest

from praatgrid import textgrid
from praatgrid.utilities.constants import Interval, INTERVAL_TIER
from praatgrid.utilities import errors

from tests.praatgrid_test_case import PraatgridTestCase
from tests.testing_utils import makeIntervalTier, makePointTier, supressStdout


class TestIntervalTier(PraatgridTestCase):
    def test__eq__(self):
        sut = makeIntervalTier(name="foo")
        intervalTier = makeIntervalTier(name="foo")

        # must be the same type
        self.assertEqual(sut, intervalTier)
        self.assertNotEqual(sut, makePointTier(name="foo"))

        # must have the same name
        self.assertNotEqual(sut, makeIntervalTier(name="bar"))

        # must have the same entries
        self.assertNotEqual(
            sut,
            makeIntervalTier(
                name="foo", intervals=[Interval(0, 2.5, "hi"), Interval(2.5, 5, "")]
            ),
        )

        # must have the same min/max timestamps
        self.assertNotEqual(
            makeIntervalTier(intervals=[Interval(1, 2, "")], minT=1, maxT=2),
            makeIntervalTier(
                intervals=[Interval(1, 2, "")], minT=0.5, maxT=2, reportingMode="silence"
            ),
        )

    def test__len__returns_the_number_of_intervals(self):
        self.assertEqual(5, len(makeIntervalTier()))
        self.assertEqual(1, len(makeIntervalTier(intervals=[Interval(0, 5, "")])))

    def test__iter__returns_the_intervals_in_order(self):
        sut = makeIntervalTier()

        self.assertEqual(
            ["", "hello", "", "world", ""], [interval.label for interval in sut]
        )
        self.assertEqual(list(sut), list(sut.intervals))
        self.assertEqual(sut.entries, sut.intervals)

    def test_tier_type(self):
        self.assertEqual(INTERVAL_TIER, makeIntervalTier().tierType)

    def test_entries_are_converted_to_intervals(self):
        sut = textgrid.IntervalTier("words", [(0, "1", "a"), [1, 2.0, 3]])

        self.assertEqual((Interval(0, 1, "a"), Interval(1, 2, "3")), sut.intervals)
        self.assertTrue(all(isinstance(interval, Interval) for interval in sut))
        self.assertIsInstance(sut.intervals, tuple)

    def test_min_and_max_default_to_the_entries(self):
        sut = textgrid.IntervalTier("words", [(0.5, 1, "a"), (1, 2, "b")])

        self.assertEqual(0.5, sut.minTimestamp)
        self.assertEqual(2, sut.maxTimestamp)

    def test_tier_without_intervals_or_bounds(self):
        with self.assertRaises(errors.ArgumentError):
            textgrid.IntervalTier("words", [])

    def test_malformed_intervals(self):
        for entry in [(0, 1), (0, 1, "a", "b"), ("zero", 1, "a"), None]:
            with self.assertRaises(errors.ArgumentError):
                textgrid.IntervalTier("words", [entry], 0, 1)

    def test_tier_is_read_only(self):
        sut = makeIntervalTier()

        with self.assertRaises(AttributeError):
            sut.name = "new name"
        with self.assertRaises(AttributeError):
            sut.minTimestamp = 1
        with self.assertRaises(AttributeError):
            sut.intervals = ()

    def test_timestamps(self):
        self.assertEqual([0, 1, 2, 3.5, 4, 5], makeIntervalTier().timestamps)

    def test_interval_at(self):
        sut = makeIntervalTier()

        self.assertEqual(Interval(0, 1, ""), sut.intervalAt(0))
        self.assertEqual(Interval(0, 1, ""), sut.intervalAt(0.5))
        self.assertEqual(Interval(1, 2, "hello"), sut.intervalAt(1))
        self.assertEqual(Interval(1, 2, "hello"), sut.intervalAt(1.999))
        self.assertEqual(Interval(2, 3.5, ""), sut.intervalAt(2))
        self.assertEqual(Interval(3.5, 4, "world"), sut.intervalAt(3.75))

    def test_interval_at_the_end_of_the_tier(self):
        sut = makeIntervalTier()

        self.assertEqual(Interval(4, 5, ""), sut.intervalAt(5))

    def test_interval_at_outside_of_the_tier(self):
        sut = makeIntervalTier()

        self.assertIsNone(sut.intervalAt(-0.1))
        self.assertIsNone(sut.intervalAt(5.1))

    def test_interval_at_in_a_gap(self):
        sut = makeIntervalTier(
            intervals=[Interval(1, 2, "hello"), Interval(3.5, 4.0, "world")],
            reportingMode="silence",
        )

        self.assertIsNone(sut.intervalAt(0.5))
        self.assertIsNone(sut.intervalAt(2))
        self.assertIsNone(sut.intervalAt(4.5))
        self.assertEqual("hello", sut.intervalAt(1.5).label)

    def test_find(self):
        sut = makeIntervalTier()

        self.assertEqual([1], sut.find("hello"))
        self.assertEqual([0, 2, 4], sut.find(""))
        self.assertEqual([], sut.find("hell"))

    def test_find_substring(self):
        sut = makeIntervalTier()

        self.assertEqual([1], sut.find("hell", substrMatchFlag=True))
        self.assertEqual([1, 3], sut.find("o", substrMatchFlag=True))

    def test_find_regular_expression(self):
        sut = makeIntervalTier()

        self.assertEqual([3], sut.find("^w", usingRE=True))
        self.assertEqual([1, 3], sut.find("L", usingRE=True))

    def test_intervals_out_of_order(self):
        with self.assertRaises(errors.OrderViolation):
            makeIntervalTier(
                intervals=[Interval(2, 5, "world"), Interval(0, 2, "hello")],
                reportingMode="silence",
            )

    def test_overlapping_intervals(self):
        with self.assertRaises(errors.OrderViolation):
            makeIntervalTier(
                intervals=[Interval(0, 2.5, "hello"), Interval(2, 5, "world")],
                reportingMode="silence",
            )

    def test_empty_interval(self):
        with self.assertRaises(errors.OrderViolation):
            makeIntervalTier(
                intervals=[Interval(0, 2, ""), Interval(2, 2, ""), Interval(2, 5, "")],
                reportingMode="silence",
            )

    def test_gaps_are_bounds_violations(self):
        with self.assertRaises(errors.BoundsViolation):
            makeIntervalTier(
                intervals=[Interval(1, 2, "hello"), Interval(3.5, 4.0, "world")]
            )

    def test_intervals_past_the_end_of_the_tier(self):
        with self.assertRaises(errors.BoundsViolation):
            makeIntervalTier(intervals=[Interval(0, 6, "hello")])

    def test_tier_end_before_tier_start(self):
        with self.assertRaises(errors.BoundsViolation):
            makeIntervalTier(intervals=[], minT=5, maxT=0, reportingMode="silence")

    def test_validate(self):
        self.assertTrue(makeIntervalTier().validate())

        sut = makeIntervalTier(
            intervals=[Interval(1, 2, "hello"), Interval(3.5, 4.0, "world")],
            reportingMode="silence",
        )
        self.assertFalse(sut.validate("silence"))
        with self.assertRaises(errors.BoundsViolation):
            sut.validate("error")
        with self.assertRaises(errors.WrongOption):
            sut.validate("loud")

    @supressStdout
    def test_validate_warning_mode_does_not_raise(self):
        sut = makeIntervalTier(intervals=[], reportingMode="warning")

        self.assertFalse(sut.validate("warning"))

    def test_get_non_entries(self):
        sut = makeIntervalTier(
            intervals=[Interval(1, 2, "hello"), Interval(3.5, 4.0, "world")],
            reportingMode="silence",
        )

        self.assertEqual(
            [Interval(0, 1, ""), Interval(2, 3.5, ""), Interval(4, 5, "")],
            sut.getNonEntries(),
        )
        self.assertEqual([], makeIntervalTier().getNonEntries())

    def test_fill_gaps(self):
        sut = makeIntervalTier(
            intervals=[Interval(1, 2, "hello"), Interval(3.5, 4.0, "world")],
            reportingMode="silence",
        )

        filledTier = sut.fillGaps("sil")

        self.assertEqual(
            (
                Interval(0, 1, "sil"),
                Interval(1, 2, "hello"),
                Interval(2, 3.5, "sil"),
                Interval(3.5, 4, "world"),
                Interval(4, 5, "sil"),
            ),
            filledTier.intervals,
        )
        self.assertTrue(filledTier.validate("silence"))

        # The original is untouched
        self.assertEqual(2, len(sut))

    def test_fill_gaps_of_an_empty_tier(self):
        sut = makeIntervalTier(intervals=[], reportingMode="silence")

        self.assertEqual((Interval(0, 5, ""),), sut.fillGaps().intervals)

    def test_fill_gaps_keeps_other_problems_in_lenient_mode(self):
        sut = textgrid.IntervalTier(
            "words",
            [(0, 0.4, "a"), (0.6, 1.2, "b")],
            0,
            1,
            reportingMode="silence",
        )

        filledTier = sut.fillGaps(reportingMode="silence")

        self.assertEqual(
            (Interval(0, 0.4, "a"), Interval(0.4, 0.6, ""), Interval(0.6, 1.2, "b")),
            filledTier.intervals,
        )
        self.assertFalse(filledTier.validate("silence"))

        # The last interval still runs past the end of the tier
        with self.assertRaises(errors.BoundsViolation):
            sut.fillGaps()

    def test_fix_boundaries_extends_the_earlier_interval(self):
        sut = makeIntervalTier(
            intervals=[Interval(0, 1, "a"), Interval(2, 3, "b"), Interval(3.5, 5, "c")],
            reportingMode="silence",
        )

        fixedTier = sut.fixBoundaries()

        self.assertEqual(
            (Interval(0, 2, "a"), Interval(2, 3.5, "b"), Interval(3.5, 5, "c")),
            fixedTier.intervals,
        )
        self.assertTrue(fixedTier.validate("error"))

        # The original is untouched
        self.assertEqual(Interval(0, 1, "a"), sut.intervals[0])

    def test_fix_boundaries_extends_the_later_interval(self):
        sut = makeIntervalTier(
            intervals=[Interval(0, 1, "a"), Interval(2, 3, "b"), Interval(3.5, 5, "c")],
            reportingMode="silence",
        )

        fixedTier = sut.fixBoundaries(preferFirst=False)

        self.assertEqual(
            (Interval(0, 1, "a"), Interval(1, 3, "b"), Interval(3, 5, "c")),
            fixedTier.intervals,
        )
        self.assertTrue(fixedTier.validate("error"))

    def test_fix_boundaries_leaves_the_tier_edges_alone(self):
        sut = makeIntervalTier(
            intervals=[Interval(1, 2, "hello"), Interval(3.5, 4.0, "world")],
            reportingMode="silence",
        )

        with self.assertRaises(errors.BoundsViolation):
            sut.fixBoundaries()

        fixedTier = sut.fixBoundaries(reportingMode="silence")
        self.assertEqual(
            (Interval(1, 3.5, "hello"), Interval(3.5, 4, "world")), fixedTier.intervals
        )
        self.assertEqual(makeIntervalTier(), makeIntervalTier().fixBoundaries())

    def test_new(self):
        sut = makeIntervalTier()

        renamedTier = sut.new(name="renamed")
        self.assertEqual("renamed", renamedTier.name)
        self.assertEqual(sut.intervals, renamedTier.intervals)
        self.assertEqual(sut.maxTimestamp, renamedTier.maxTimestamp)

        self.assertEqual(sut, sut.new())


if __name__ == "__main__":
    unittest.main()
