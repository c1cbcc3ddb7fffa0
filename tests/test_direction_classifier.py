"""
Tests for debit / credit direction scoring.
"""

import unittest

from statement_engine.extraction.direction import Direction, DirectionClassifier


class TestDirectionClassifier(unittest.TestCase):
    """Test cases for DirectionClassifier."""

    def setUp(self):
        """Set up test fixtures."""
        self.classifier = DirectionClassifier()

    def test_debited_alert(self):
        result = self.classifier.classify("rs 500 debited from a/c xx12")
        self.assertEqual(result.direction, Direction.DEBIT)
        self.assertEqual(result.debit_score, 4)
        self.assertEqual(result.credit_score, 0)
        self.assertAlmostEqual(result.confidence, 0.95)

    def test_credited_alert(self):
        result = self.classifier.classify("inr 2,000 credited to your account")
        self.assertEqual(result.direction, Direction.CREDIT)
        self.assertAlmostEqual(result.confidence, 0.95)
        self.assertIn("credited", result.matched_keywords)

    def test_refund_overrides_debited_mention(self):
        """Refund wording wins even when the original debit is mentioned."""
        result = self.classifier.classify(
            "inr 500 credited. refund processed for earlier debited transaction."
        )
        self.assertEqual(result.direction, Direction.CREDIT)
        self.assertEqual(result.debit_score, 4)
        self.assertEqual(result.credit_score, 12)
        self.assertAlmostEqual(result.confidence, 0.85)

    def test_no_keywords_defaults_to_debit(self):
        result = self.classifier.classify("hello world")
        self.assertEqual(result.direction, Direction.DEBIT)
        self.assertAlmostEqual(result.confidence, 0.35)
        self.assertEqual(result.matched_keywords, [])

    def test_short_form_dr(self):
        """A standalone Dr adds to the keyword hit."""
        result = self.classifier.classify("rs 1,000 dr")
        self.assertEqual(result.direction, Direction.DEBIT)
        self.assertEqual(result.debit_score, 4)

    def test_short_form_cr(self):
        result = self.classifier.classify("rs 1,000 cr")
        self.assertEqual(result.direction, Direction.CREDIT)
        self.assertEqual(result.credit_score, 4)

    def test_failed_transaction_damps_scores(self):
        """Failed transactions are still classified, with damped scores."""
        result = self.classifier.classify("txn of rs 500 debited failed")
        self.assertTrue(result.is_failed)
        self.assertEqual(result.direction, Direction.DEBIT)
        self.assertAlmostEqual(result.debit_score, 2.8)

    def test_tie_prefers_debit(self):
        result = self.classifier.classify("sent and received")
        self.assertEqual(result.direction, Direction.DEBIT)
        self.assertAlmostEqual(result.confidence, 0.4)

    def test_confidence_bounds(self):
        """Confidence always stays within [0.35, 0.95]."""
        samples = [
            "rs 500 debited",
            "refund credited",
            "sent and received",
            "bill paid, cashback received",
            "nothing here",
        ]
        for text in samples:
            result = self.classifier.classify(text)
            self.assertGreaterEqual(result.confidence, 0.35)
            self.assertLessEqual(result.confidence, 0.95)

    def test_extra_keywords(self):
        """Extra keywords extend the built-in tables."""
        plain = self.classifier.classify("rs 300 autopay executed")
        self.assertAlmostEqual(plain.confidence, 0.35)

        classifier = DirectionClassifier(extra_keywords={"credit": [("autopay", 2)]})
        result = classifier.classify("rs 300 autopay executed")
        self.assertEqual(result.direction, Direction.CREDIT)
        self.assertEqual(result.credit_score, 2)


if __name__ == "__main__":
    unittest.main()
