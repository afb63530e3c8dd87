import unittest
from os.path import join

from praatgrid import textgrid
from praatgrid.utilities.constants import Interval, Point
from praatgrid.utilities import constants
from praatgrid.utilities import errors

from tests.praatgrid_test_case import PraatgridTestCase
from tests.testing_utils import makeIntervalTier, makePointTier


def makeTextgrid(*tiers, minT=0, maxT=5.0, **kwargs):
    if not tiers:
        tiers = (makeIntervalTier(), makePointTier())
    return textgrid.Textgrid(minT, maxT, tiers, **kwargs)


class TestTextgrid(PraatgridTestCase):
    def test__eq__(self):
        sut = makeTextgrid()

        self.assertEqual(sut, makeTextgrid())
        self.assertNotEqual(sut, makeTextgrid(makeIntervalTier()))
        self.assertNotEqual(sut, makeTextgrid(makePointTier(), makeIntervalTier()))
        self.assertNotEqual(sut, makeIntervalTier())

    def test__eq__ignores_warnings(self):
        self.assertEqual(makeTextgrid(), makeTextgrid(warnings=["a warning"]))

    def test__len__and__iter__(self):
        intervalTier = makeIntervalTier()
        pointTier = makePointTier()
        sut = makeTextgrid(intervalTier, pointTier)

        self.assertEqual(2, len(sut))
        self.assertEqual([intervalTier, pointTier], list(sut))
        self.assertEqual((intervalTier, pointTier), sut.tiers)

    def test_textgrid_may_have_no_tiers(self):
        sut = textgrid.Textgrid(0, 1)
        self.assertEqual(0, len(sut))
        self.assertEqual((), sut.tierNames)

    def test_tier_names_are_in_order(self):
        sut = makeTextgrid(
            makePointTier(name="b"), makeIntervalTier(name="a"), makePointTier(name="c")
        )

        self.assertEqual(("b", "a", "c"), sut.tierNames)

    def test_tier_at(self):
        intervalTier = makeIntervalTier()
        pointTier = makePointTier()
        sut = makeTextgrid(intervalTier, pointTier)

        self.assertEqual(intervalTier, sut.tierAt(0))
        self.assertEqual(pointTier, sut.tierAt(1))
        self.assertEqual(pointTier, sut.tierAt(-1))
        with self.assertRaises(IndexError):
            sut.tierAt(2)

    def test_tier_by_name(self):
        intervalTier = makeIntervalTier(name="words")
        pointTier = makePointTier(name="tones")
        sut = makeTextgrid(intervalTier, pointTier)

        self.assertEqual(intervalTier, sut.tierByName("words"))
        self.assertEqual(pointTier, sut.tierByName("tones"))
        self.assertIsNone(sut.tierByName("phones"))

    def test_get_tier(self):
        pointTier = makePointTier(name="tones")
        sut = makeTextgrid(makeIntervalTier(name="words"), pointTier)

        self.assertEqual(pointTier, sut.getTier("tones"))

        with self.assertRaises(errors.TierNotFound) as cm:
            sut.getTier("phones")
        self.assertEqual("phones", cm.exception.tierName)

    def test_duplicate_names_find_the_first_tier(self):
        firstTier = makeIntervalTier(name="speaker")
        secondTier = makeIntervalTier(
            name="speaker", intervals=[Interval(0, 5, "everything")]
        )
        sut = makeTextgrid(firstTier, secondTier)

        self.assertEqual(firstTier, sut.getTier("speaker"))
        self.assertEqual(firstTier, sut.tierByName("speaker"))
        self.assertEqual(secondTier, sut.tierAt(1))

    def test_textgrid_is_read_only(self):
        sut = makeTextgrid()

        with self.assertRaises(AttributeError):
            sut.tiers = ()
        with self.assertRaises(AttributeError):
            sut.maxTimestamp = 10
        with self.assertRaises(TypeError):
            sut.tiers[0] = makePointTier()

    def test_tiers_must_span_the_textgrid(self):
        shortTier = makePointTier(maxT=4.0)

        with self.assertRaises(errors.BoundsViolation):
            makeTextgrid(shortTier)

        sut = makeTextgrid(shortTier, reportingMode="silence")
        self.assertFalse(sut.validate("silence"))
        self.assertTrue(makeTextgrid().validate("silence"))

    def test_textgrid_end_before_start(self):
        with self.assertRaises(errors.BoundsViolation):
            textgrid.Textgrid(1, 1, reportingMode="silence")

    def test_save_rejects_bad_options(self):
        sut = makeTextgrid()
        outputFN = join(self.outputRoot, "bad_options.TextGrid")

        with self.assertRaises(errors.WrongOption):
            sut.save(outputFN, format="json")

        with self.assertRaises(errors.WrongOption):
            sut.save(outputFN, format="short_textgrid", reportingMode="loud")

    def test_save_validates_first(self):
        sut = makeTextgrid(makePointTier(maxT=4.0), reportingMode="silence")
        outputFN = join(self.outputRoot, "invalid.TextGrid")

        with self.assertRaises(errors.BoundsViolation):
            sut.save(outputFN, format="short_textgrid")

    def test_save_and_reopen(self):
        sut = makeTextgrid(
            makeIntervalTier(name="words"),
            makePointTier(name="tones", points=[Point(0.25, 'a "quoted" label')]),
        )

        for outputFormat in constants.TextgridFormats.validOptions:
            outputFN = join(self.outputRoot, f"save_and_reopen_{outputFormat}.TextGrid")
            sut.save(outputFN, format=outputFormat)

            self.assertEqual(sut, textgrid.openTextgrid(outputFN))

    def test_reopening_mary(self):
        tg = textgrid.openTextgrid(join(self.dataRoot, "mary.TextGrid"))

        wordTier = tg.getTier("word")
        self.assertEqual("mary", wordTier.intervalAt(0.5).label)
        self.assertEqual("", wordTier.intervalAt(tg.maxTimestamp).label)
        self.assertAlmostEqual(0.6542 - 0.3154201182247563, wordTier.intervals[1].duration)
        self.assertEqual(Point(1.5, "L-L%"), tg.getTier("tone").pointAfter(0.5))


if __name__ == "__main__":
    unittest.main()
