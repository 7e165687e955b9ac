"""
Tests for the bank message parser.

Covers field extraction for the main payment rails, pre-filtering and
credit card bill parsing.
"""

import unittest
from datetime import date, datetime

from sms_finance_engine.models import PaymentChannel, TransactionType
from sms_finance_engine.parsing.engine import MessageParser


class TestUpiParsing(unittest.TestCase):
    """Test UPI message extraction."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MessageParser()

    def test_hdfc_upi(self):
        txn = self.parser.parse("Paid Rs.350.00 to SWIGGY on 15-01-24 using UPI. UPI Ref: 123456. -HDFC Bank")

        self.assertIsNotNone(txn)
        self.assertEqual(txn.amount, 350.0)
        self.assertEqual(txn.type, TransactionType.DEBIT)
        self.assertEqual(txn.merchant_name, "SWIGGY")
        self.assertEqual(txn.transaction_date, datetime(2024, 1, 15))
        self.assertEqual(txn.reference, "123456")
        self.assertEqual(txn.bank_name, "HDFC")
        self.assertEqual(txn.payment_channel, PaymentChannel.UPI)
        self.assertEqual(txn.template_name, "HDFC_UPI")
        self.assertAlmostEqual(txn.confidence, 0.95)
        self.assertTrue(txn.is_reliable)

    def test_sbi_upi_vpa(self):
        txn = self.parser.parse(
            "Rs.1200 debited from A/c XX1234 to VPA swiggy@upi on 14-12-24. UPI Ref 433218765432 -SBI"
        )

        self.assertEqual(txn.amount, 1200.0)
        self.assertEqual(txn.merchant_name, "swiggy@upi")
        self.assertEqual(txn.account_last_four, "1234")
        self.assertEqual(txn.reference, "433218765432")
        self.assertEqual(txn.bank_name, "SBI")

    def test_generic_vpa_detects_bank_from_text(self):
        txn = self.parser.parse(
            "Rs.450 debited from A/c XX9876 to VPA zomato@ybl on 14-Dec-24. UPI Ref 433212345678. Kotak Bank"
        )

        self.assertEqual(txn.template_name, "GENERIC_VPA_UPI")
        self.assertEqual(txn.bank_name, "KOTAK")
        self.assertEqual(txn.transaction_date, datetime(2024, 12, 14))

    def test_upi_credit_sets_sender(self):
        txn = self.parser.parse(
            "Dear Customer, Acct XX494 is credited with Rs 5,000.00 on 10-Dec-25 from RAMESH SHARMA. "
            "UPI:534987654321-ICICI Bank."
        )

        self.assertEqual(txn.type, TransactionType.CREDIT)
        self.assertEqual(txn.amount, 5000.0)
        self.assertEqual(txn.sender_name, "RAMESH SHARMA")
        self.assertEqual(txn.merchant_name, "RAMESH SHARMA")

    def test_autopay_is_subscription_hint(self):
        txn = self.parser.parse(
            "Rs 1499.00 debited from ICICI Bank Savings Account XX494 on 17-Dec-25 towards JioHotstar "
            "for Autopay AutoPay Retrieval Ref No.535196959911"
        )

        self.assertEqual(txn.merchant_name, "JioHotstar")
        self.assertEqual(txn.payment_channel, PaymentChannel.AUTOPAY)
        self.assertTrue(txn.is_likely_subscription)
        self.assertEqual(txn.reference, "535196959911")

    def test_mandate_revocation(self):
        txn = self.parser.parse(
            "Dear Customer, your AutoPay mandate is successfully revoked towards Netflix for Rs 649.00, "
            "RRN 534512345678. -ICICI Bank"
        )

        self.assertTrue(txn.is_mandate_revocation)
        self.assertEqual(txn.merchant_name, "Netflix")
        self.assertEqual(txn.amount, 649.0)


class TestOtherRails(unittest.TestCase):
    """Test FASTag, EMI, insurance, card and transfer messages."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MessageParser()

    def test_fastag_toll(self):
        txn = self.parser.parse(
            "Rs.95.00 paid at Khed Shivapur Toll Plaza for MH12AB1234 on 15-01-2024 10:32:11 "
            "with ICICI Bank FASTag. Avl Bal Rs.450.00"
        )

        self.assertEqual(txn.payment_channel, PaymentChannel.FASTAG)
        self.assertEqual(txn.toll_name, "Khed Shivapur Toll Plaza")
        self.assertEqual(txn.vehicle_number, "MH12AB1234")
        self.assertEqual(txn.transaction_date, datetime(2024, 1, 15, 10, 32, 11))
        self.assertEqual(txn.bank_name, "ICICI")

    def test_generic_emi_uses_loan_type(self):
        txn = self.parser.parse("Gold Loan EMI Rs.3,000 debited from A/c XX5555 on 15-May-24. Kotak Bank")

        self.assertEqual(txn.merchant_name, "Gold EMI")
        self.assertEqual(txn.amount, 3000.0)
        self.assertEqual(txn.payment_channel, PaymentChannel.EMI)
        self.assertTrue(txn.is_likely_subscription)

    def test_message_without_date_uses_receipt_time(self):
        received = datetime(2024, 8, 1, 9, 15)
        txn = self.parser.parse(
            "Rs.4,500 has been debited from your A/c XX3333 towards LIC Premium. -SBI",
            received_at=received,
        )

        self.assertEqual(txn.merchant_name, "LIC Premium")
        self.assertEqual(txn.transaction_date, received)
        self.assertEqual(txn.bank_name, "SBI")

    def test_foreign_currency_card_spend(self):
        txn = self.parser.parse(
            "USD 20.00 spent using ICICI Bank Card XX9004 on 02-Dec-25 on OPENAI *CHATGPT SUBSCR. "
            "Avl Limit: INR 98,765.00"
        )

        self.assertEqual(txn.currency, "USD")
        self.assertEqual(txn.amount, 20.0)
        self.assertEqual(txn.card_last_four, "9004")
        self.assertEqual(txn.merchant_name, "OPENAI *CHATGPT SUBSCR")

    def test_transfer_rail_sets_channel(self):
        txn = self.parser.parse(
            "Rs.10,000 transferred via IMPS from A/c ...4321 to PRIYA SHARMA on 04-01-25. "
            "Ref:BARBN25004123456 -Bank of Baroda"
        )

        self.assertEqual(txn.template_name, "BOB_NEFT")
        self.assertEqual(txn.payment_channel, PaymentChannel.IMPS)
        self.assertEqual(txn.merchant_name, "PRIYA SHARMA")


class TestRepeatedParsing(unittest.TestCase):
    """The same input always yields the same result."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MessageParser()

    def test_dated_message_with_receipt_time(self):
        text = "Paid Rs.350.00 to SWIGGY on 15-01-24 using UPI. UPI Ref: 123456. -HDFC Bank"
        received = datetime(2024, 1, 15, 20, 5)

        first = self.parser.parse(text, received_at=received)
        second = self.parser.parse(text, received_at=received)

        self.assertEqual(first, second)
        self.assertEqual(first.transaction_date, datetime(2024, 1, 15))

    def test_undated_message_with_receipt_time(self):
        text = "Rs.4,500 has been debited from your A/c XX3333 towards LIC Premium. -SBI"
        received = datetime(2024, 8, 1, 9, 15)

        self.assertEqual(self.parser.parse(text, received_at=received),
                         MessageParser().parse(text, received_at=received))

    def test_rejected_message_stays_rejected(self):
        text = "Your OTP is 482910, valid for 10 minutes"
        self.assertIsNone(self.parser.parse(text))
        self.assertIsNone(self.parser.parse(text))


class TestNonTransactions(unittest.TestCase):
    """Messages that must not produce a transaction."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MessageParser()

    def test_otp_returns_none(self):
        self.assertIsNone(self.parser.parse("Your OTP is 482913. Do not share it with anyone."))

    def test_unmatched_message_returns_none(self):
        self.assertIsNone(self.parser.parse("Your parcel has been shipped"))

    def test_empty_message_returns_none(self):
        self.assertIsNone(self.parser.parse(""))
        self.assertIsNone(self.parser.match_template(""))


class TestBillParsing(unittest.TestCase):
    """Test credit card statement extraction."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MessageParser()

    def test_hdfc_statement(self):
        bill = self.parser.parse_bill(
            "Your HDFC Credit Card XX4523 statement is ready. Total Due: Rs.12450. Min Due: Rs.625. "
            "Due Date: 05-Jan-25"
        )

        self.assertEqual(bill.card_last_four, "4523")
        self.assertEqual(bill.total_due, 12450.0)
        self.assertEqual(bill.minimum_due, 625.0)
        self.assertEqual(bill.due_date, date(2025, 1, 5))
        self.assertEqual(bill.bank_name, "HDFC")

    def test_bill_without_card_or_minimum(self):
        bill = self.parser.parse_bill("ICICI Card bill generated. Amount: Rs.3200. Due: 12-Jan-25. Pay now.")

        self.assertEqual(bill.card_last_four, "")
        self.assertIsNone(bill.minimum_due)
        self.assertEqual(bill.total_due, 3200.0)

    def test_unreadable_due_date_defaults(self):
        bill = self.parser.parse_bill(
            "ICICI Card bill generated. Amount: Rs.3200. Due: 99-Abc-25.",
            today=date(2024, 1, 1),
        )

        self.assertEqual(bill.due_date, date(2024, 1, 31))

    def test_transaction_is_not_a_bill(self):
        self.assertIsNone(self.parser.parse_bill(
            "Paid Rs.350.00 to SWIGGY on 15-01-24 using UPI. UPI Ref: 123456. -HDFC Bank"
        ))


class TestSubscriptionLookup(unittest.TestCase):

    def test_known_subscription(self):
        self.assertTrue(MessageParser.is_known_subscription("Netflix"))
        self.assertTrue(MessageParser.is_known_subscription("SPOTIFY INDIA"))

    def test_unknown_merchant(self):
        self.assertFalse(MessageParser.is_known_subscription("Ramesh"))
        self.assertFalse(MessageParser.is_known_subscription(""))


if __name__ == "__main__":
    unittest.main()
