"""
Bank message template catalogs.

One ordered catalog per extractor. Within a catalog the first matching
template wins, so specific bank layouts must stay ahead of the generic
fallbacks. Every template carries a sample message that must resolve to
that template through the full dispatch chain.
"""

import re
from typing import Dict, List

from ..models import MessageTemplate, PaymentChannel, TransactionType

AMOUNT = r"(?P<amount>[0-9,]+\.?\d*)"
# Lazy merchant captures followed by optional groups stop at a sentence end
SENTENCE_END = r"(?:\.(?:\s|$)|$)"


def _template(name: str, regex: str, sample: str, flags: int = 0, **fields) -> MessageTemplate:
    return MessageTemplate(
        name=name,
        pattern=re.compile(regex, re.IGNORECASE | flags),
        sample=sample,
        **fields,
    )


def _channel_from_rail(transaction, groups: Dict[str, str]) -> None:
    rail = (groups.get("rail") or "").upper()
    if rail in (PaymentChannel.NEFT.value, PaymentChannel.IMPS.value):
        transaction.payment_channel = PaymentChannel(rail)


# ----------------------------
# FASTag toll deductions
# ----------------------------
FASTAG_TEMPLATES = [
    _template(
        "ICICI_FASTAG",
        r"Rs\.?" + AMOUNT + r"\s+paid\s+at\s+(?P<merchant>.+?)\s+for\s+(?P<vehicle>\w+)\s+on\s+"
        r"(?P<date>\d{2}-\d{2}-\d{4})\s+(?P<time>\d{2}:\d{2}:\d{2})\s+with\s+ICICI\s+Bank\s+FASTag",
        "Rs.95.00 paid at Khed Shivapur Toll Plaza for MH12AB1234 on 15-01-2024 10:32:11 "
        "with ICICI Bank FASTag. Avl Bal Rs.450.00",
        bank="ICICI", channel=PaymentChannel.FASTAG,
    ),
    _template(
        "ICICI_FASTAG_ALT",
        r"(?:INR|Rs\.?)\s*" + AMOUNT + r"\s+deducted\s+from\s+FASTag\s+linked\s+to\s+vehicle\s+"
        r"(?P<vehicle>\w+)\s+at\s+(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{4})",
        "INR 65.00 deducted from FASTag linked to vehicle KA01MN4321 at Electronic City Toll "
        "on 02-02-2024. ICICI Bank",
        bank="ICICI", channel=PaymentChannel.FASTAG,
    ),
    _template(
        "HDFC_FASTAG",
        r"Rs\.?" + AMOUNT + r"\s+toll\s+charged\s+at\s+(?P<merchant>.+?)\s+for\s+vehicle\s+"
        r"(?P<vehicle>\w+)\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4}).*?HDFC\s+Bank\s+FASTag",
        "Rs.120 toll charged at Kherki Daula Plaza for vehicle HR26CD5678 on 10-03-24 via HDFC Bank FASTag",
        bank="HDFC", channel=PaymentChannel.FASTAG,
    ),
    _template(
        "AXIS_FASTAG",
        r"Toll\s+of\s+Rs\.?" + AMOUNT + r"\s+paid\s+at\s+(?P<merchant>.+?)\s+for\s+(?P<vehicle>\w+)\s+"
        r"via\s+Axis\s+Bank\s+FASTag\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4})",
        "Toll of Rs.85 paid at Vashi Toll Plaza for MH04XY9876 via Axis Bank FASTag on 05-04-24",
        bank="AXIS", channel=PaymentChannel.FASTAG,
    ),
    _template(
        "SBI_FASTAG",
        r"SBI\s+FASTag[:\s]+Rs\.?" + AMOUNT + r"\s+deducted\s+for\s+vehicle\s+(?P<vehicle>\w+)\s+"
        r"at\s+(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{4})",
        "SBI FASTag: Rs.150 deducted for vehicle DL3CAB1234 at Murthal Toll Plaza on 12-05-2024",
        bank="SBI", channel=PaymentChannel.FASTAG,
    ),
    _template(
        "GENERIC_FASTAG",
        r"Rs\.?" + AMOUNT + r"\s+(?:paid|deducted|charged)\s+(?:at|for)\s+(?P<merchant>.+?)\s+"
        r"(?:for|via)\s+(?:vehicle\s+)?(?P<vehicle>\w+)\b.*?FASTag.*?on\s+(?P<date>\d{2}-\d{2}-\d{2,4})",
        "Rs.210 paid at Panipat Toll for vehicle HR06EF2222 using Kotak FASTag on 20-06-24",
        base_confidence=0.85, channel=PaymentChannel.FASTAG,
    ),
]


# ----------------------------
# Prepaid / meal cards
# ----------------------------
PREPAID_CARD_TEMPLATES = [
    _template(
        "ICICI_PREPAID",
        r"Rs\.?\s*" + AMOUNT + r"\s+debited\s+from\s+ICICI\s+Bank\s+Prepaid\s+Card\s+(?P<card>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\.?\s*Info-?\s*(?P<merchant>.+?)\.?\s*(?:The\s+)?(?:Available|Avl)",
        "Rs 250.00 debited from ICICI Bank Prepaid Card 4321 on 15-Jan-24. Info- SODEXO CAFE. "
        "The Available balance is Rs 1200.00",
        bank="ICICI", channel=PaymentChannel.PREPAID_CARD,
    ),
    _template(
        "ICICI_PREPAID_ALT",
        r"Rs\.?\s*" + AMOUNT + r"\s+debited\s+from\s+ICICI\s+Bank\s+Prepaid\s+Card\s+(?P<card>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+at\s+(?P<merchant>.+?)\.?\s*(?:Available|Avl|Balance)",
        "Rs 180.00 debited from ICICI Bank Prepaid Card 4321 on 16-Jan-24 at CAFE COFFEE DAY. Avl Bal Rs 1020.00",
        bank="ICICI", channel=PaymentChannel.PREPAID_CARD,
    ),
    _template(
        "GENERIC_PREPAID",
        r"Rs\.?\s*" + AMOUNT + r"\s+(?:debited|spent)\s+(?:from|using)\s+.*?Prepaid\s+Card.*?(?P<card>\d{4})\s+"
        r"(?:on|at)\s+(?P<date>\d{2}-\w{3}-\d{2,4}).*?(?:at|for|Info-?)\s*(?P<merchant>.+?)\.?\s*"
        r"(?:Available|Avl|Balance|$)",
        "Rs.500 spent using your HDFC Bank Prepaid Card ending 7788 on 18-Feb-24 at BIG BAZAAR. "
        "Available balance Rs.2500",
        base_confidence=0.85, channel=PaymentChannel.PREPAID_CARD,
    ),
]


# ----------------------------
# Loan EMIs
# ----------------------------
EMI_TEMPLATES = [
    _template(
        "HOME_LOAN_EMI",
        r"EMI\s+of\s+Rs\.?" + AMOUNT + r"\s+for\s+Home\s+Loan\s+A/c\s+\d+\s+debited\s+from\s+A/c\s+XX"
        r"(?P<account>\d+)\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "EMI of Rs.25,000.00 for Home Loan A/c 1234567 debited from A/c XX4321 on 05-Jan-24. -HDFC Bank",
        merchant="Home Loan EMI", channel=PaymentChannel.EMI, is_subscription_hint=True,
    ),
    _template(
        "CAR_LOAN_EMI",
        r"Car\s+Loan\s+EMI\s+Rs\.?" + AMOUNT + r"\s+auto-debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Car Loan EMI Rs.15,500 auto-debited from A/c XX8765 on 07-Feb-24. ICICI Bank",
        merchant="Car Loan EMI", channel=PaymentChannel.EMI, is_subscription_hint=True,
    ),
    _template(
        "PERSONAL_LOAN_EMI",
        r"Personal\s+Loan\s+EMI\s+(?:of\s+)?Rs\.?" + AMOUNT + r"\s+paid\s+from\s+A/c\s+XX(?P<account>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Personal Loan EMI of Rs.8,200 paid from A/c XX1111 on 10-Mar-24 -SBI",
        merchant="Personal Loan EMI", channel=PaymentChannel.EMI, is_subscription_hint=True,
    ),
    _template(
        "EDUCATION_LOAN_EMI",
        r"Education\s+Loan\s+EMI\s+Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Education Loan EMI Rs.6,000 debited from A/c XX2222 on 12-Apr-24. Axis Bank",
        merchant="Education Loan EMI", channel=PaymentChannel.EMI, is_subscription_hint=True,
    ),
    _template(
        "GENERIC_EMI",
        r"(?:(?P<loan_type>\w+)\s+)?(?:Loan\s+)?\bEMI\s+(?:of\s+)?Rs\.?" + AMOUNT + r"\s+(?:auto-)?debited\s+"
        r"from\s+A/c\s+XX(?P<account>\d+)(?:\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4}))?",
        "Gold Loan EMI Rs.3,000 debited from A/c XX5555 on 15-May-24. Kotak Bank",
        base_confidence=0.90, merchant="{loan_type} EMI", defaults={"loan_type": "Loan"},
        channel=PaymentChannel.EMI, is_subscription_hint=True,
    ),
]


# ----------------------------
# Insurance premiums
# ----------------------------
INSURANCE_TEMPLATES = [
    _template(
        "LIC_PREMIUM",
        r"Rs\.?" + AMOUNT + r"\s+has\s+been\s+debited\s+from\s+(?:your\s+)?A/c\s+XX(?P<account>\d+)\s+"
        r"towards\s+LIC\s+Premium",
        "Rs.4,500 has been debited from your A/c XX3333 towards LIC Premium. -SBI",
        merchant="LIC Premium", channel=PaymentChannel.INSURANCE, is_subscription_hint=True,
    ),
    _template(
        "HDFC_LIFE_PREMIUM",
        r"HDFC\s+Life\s+Premium\s+of\s+Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})",
        "HDFC Life Premium of Rs.12,000 debited from A/c XX4444 on 20-Jun-24",
        bank="HDFC", merchant="HDFC Life Premium", channel=PaymentChannel.INSURANCE,
        is_subscription_hint=True,
    ),
    _template(
        "INSURANCE_AUTOPAY",
        r"Rs\.?\s*" + AMOUNT + r"\s+debited\s+from\s+\w+\s+Bank\s+(?:Savings\s+)?Account\s+XX(?P<account>\d+)\s+"
        r"on\s+(?P<date>\d{2}-\w{3}-\d{2,4})\s+towards\s+(?P<merchant>.+?)\s+for\s+Insurance\s+AutoPay",
        "Rs 2,350.00 debited from ICICI Bank Savings Account XX494 on 01-Jul-24 towards STAR HEALTH "
        "for Insurance AutoPay. Retrieval Ref No.612345678901",
        flags=re.DOTALL, channel=PaymentChannel.INSURANCE, is_subscription_hint=True,
    ),
    _template(
        "GENERIC_INSURANCE",
        r"Insurance\s+(?:premium\s+)?(?:of\s+)?Rs\.?\s*" + AMOUNT + r"\s+debited",
        "Your Insurance premium of Rs.1,800 debited from A/c XX9999 on 05-Aug-24. Kotak Bank",
        base_confidence=0.85, merchant="Insurance Premium", channel=PaymentChannel.INSURANCE,
        is_subscription_hint=True,
    ),
]


# ----------------------------
# Investments
# ----------------------------
INVESTMENT_TEMPLATES = [
    _template(
        "NPS_CONTRIBUTION",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+towards\s+NPS\s+contribution",
        "Rs.5,000 debited from A/c XX6666 towards NPS contribution. PRAN XXXX1234 -HDFC Bank",
        merchant="NPS Contribution", channel=PaymentChannel.INVESTMENT, is_subscription_hint=True,
    ),
    _template(
        "SIP_DEBIT",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+towards\s+SIP\s+for\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Rs.2,000 debited from A/c XX6666 towards SIP for AXIS BLUECHIP FUND on 10-Sep-24",
        merchant="SIP - {merchant}", channel=PaymentChannel.INVESTMENT, is_subscription_hint=True,
    ),
    _template(
        "MUTUAL_FUND",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+for\s+Mutual\s+Fund\s+Purchase"
        r"\s*-?\s*(?P<merchant>.+?)\.?\s+Ref",
        "Rs.10,000 debited from A/c XX7777 for Mutual Fund Purchase - PARAG PARIKH FLEXI CAP. Ref 556677",
        merchant="MF - {merchant}", channel=PaymentChannel.INVESTMENT,
    ),
    # Requires an investment word so account charges fall through to the bank charge catalog
    _template(
        "GENERIC_INVESTMENT",
        r"Rs\.?" + AMOUNT + r"\s+(?:debited|invested)\s+from\s+A/c\s+XX(?P<account>\d+)\s+(?:towards|for)\s+"
        r"(?P<merchant>[^.]*?\b(?:invest\w*|funds?|sip|nps|stocks?|equity|bonds?|gold)\b[^.]*?)"
        r"(?:\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4}))?(?:\.|$)",
        "Rs.1,500 invested from A/c XX8888 towards DIGITAL GOLD on 01-Oct-24. Ref 998877",
        base_confidence=0.80, channel=PaymentChannel.INVESTMENT,
    ),
]


# ----------------------------
# Account charges
# ----------------------------
BANK_CHARGE_TEMPLATES = [
    _template(
        "MAB_CHARGE",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+towards\s+MAB\s+charges",
        "Rs.590 debited from A/c XX1234 towards MAB charges for Dec-24. -ICICI Bank",
        merchant="Bank Charge - MAB", channel=PaymentChannel.BANK_CHARGE,
    ),
    _template(
        "AMB_CHARGE",
        r"Rs\.?" + AMOUNT + r"\s+has\s+been\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+for\s+"
        r"non-maintenance\s+of\s+AMB",
        "Rs.354 has been debited from A/c XX2468 for non-maintenance of AMB. -HDFC Bank",
        merchant="Bank Charge - AMB", channel=PaymentChannel.BANK_CHARGE,
    ),
    _template(
        "SERVICE_CHARGE",
        r"Rs\.?" + AMOUNT + r"\s+(?:incl\s+GST\s+)?debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+towards\s+"
        r"Service\s+Charges",
        "Rs.118 incl GST debited from A/c XX1357 towards Service Charges. -SBI",
        merchant="Bank Charge - Service", channel=PaymentChannel.BANK_CHARGE,
    ),
    _template(
        "GENERIC_CHARGE",
        r"Rs\.?" + AMOUNT + r"\s+(?:has\s+been\s+)?debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+towards\s+"
        r"(?P<merchant>.+?)\s+charges",
        "Rs.25 debited from A/c XX9753 towards SMS Alert charges for the quarter. -Axis Bank",
        base_confidence=0.85, merchant="Bank Charge - {merchant}", channel=PaymentChannel.BANK_CHARGE,
    ),
]


# ----------------------------
# UPI, mandates and autopay
# ----------------------------
UPI_TEMPLATES = [
    _template(
        "HDFC_UPI_MULTILINE",
        r"Sent\s+Rs\.?" + AMOUNT + r"\s+From\s+HDFC\s+Bank\s+A/C\s+\*(?P<account>\d+)\s+To\s+(?P<merchant>.+?)\s+"
        r"On\s+(?P<date>\d{2}/\d{2}/\d{2,4})\s+Ref\s+(?P<ref>\d+)",
        "Sent Rs.500.00\nFrom HDFC Bank A/C *1234\nTo RAHUL KUMAR\nOn 15/01/24\nRef 401234567890\n"
        "Not You? Call 18002586161/SMS BLOCK UPI to 7308080808",
        flags=re.DOTALL, bank="HDFC", channel=PaymentChannel.UPI,
    ),
    _template(
        "HDFC_UPI",
        r"Paid\s+Rs\.?" + AMOUNT + r"\s+to\s+(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4})\s+using\s+UPI"
        r".*?UPI\s+Ref[:\s]*(?P<ref>\d+)",
        "Paid Rs.350.00 to SWIGGY on 15-01-24 using UPI. UPI Ref: 123456. -HDFC Bank",
        bank="HDFC", channel=PaymentChannel.UPI,
    ),
    _template(
        "ICICI_ACCOUNT_UPI",
        r"ICICI\s+Bank\s+Acct?\s+XX?(?P<account>\d+)\s+debited\s+for\s+Rs\.?\s*" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4});?\s*(?P<merchant>.+?)\s+credited\.?\s*UPI[:\s]*(?P<ref>\d+)",
        "ICICI Bank Acct XX494 debited for Rs 240.00 on 16-Dec-25; SHREE GANESH STORES credited. "
        "UPI:533612345678. Call 18002662 for dispute. SMS BLOCK 494 to 9215676766.",
        bank="ICICI", channel=PaymentChannel.UPI,
    ),
    _template(
        "ICICI_AUTOPAY",
        r"Rs\.?\s*" + AMOUNT + r"\s+debited\s+from\s+ICICI\s+Bank\s+(?:Savings\s+)?Account\s+XX(?P<account>\d+)\s+"
        r"on\s+(?P<date>\d{2}-\w{3}-\d{2,4})\s+towards\s+(?P<merchant>.+?)\s+for\s+"
        r"(?:Autopay|MERCHANTMANDATE|Create\s+Mandate|[A-Za-z]+(?:\s+[A-Za-z]+)*)\s*AutoPay"
        r"(?:.*?Retrieval\s+Ref\s+No\.?\s*(?P<ref>\d+))?",
        "Rs 1499.00 debited from ICICI Bank Savings Account XX494 on 17-Dec-25 towards JioHotstar "
        "for Autopay AutoPay Retrieval Ref No.535196959911",
        flags=re.DOTALL, bank="ICICI", channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "ICICI_AUTOPAY_SUCCESS",
        r"Your\s+account\s+has\s+been\s+successfully\s+debited\s+with\s+Rs\.?\s*" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+towards\s+(?P<merchant>.+?)\s+for\s+"
        r"(?:[A-Za-z]+(?:\s+[A-Za-z]+)*\s+)?AutoPay",
        "Your account has been successfully debited with Rs 199.00 on 05-Nov-25 towards Spotify India "
        "for MERCHANTMANDATE AutoPay, RRN 531234567890-ICICI Bank.",
        bank="ICICI", channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "ICICI_SWEEP",
        r"ICICI\s+Bank\s+Acc\s+XX(?P<account>\d+)\s+debited\s+Rs\.?\s*" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+InfoSweep\s+to\s+OD",
        "ICICI Bank Acc XX494 debited Rs 10,000.00 on 03-Dec-25 InfoSweep to OD A/c 12345.",
        bank="ICICI", merchant="Sweep to OD Account", channel=PaymentChannel.UNKNOWN,
    ),
    _template(
        "ICICI_AUTOPAY_REVOCATION",
        r"your\s+AutoPay\s+mandate\s+is\s+successfully\s+revoked\s+towards\s+(?P<merchant>.+?)\s+for\s+"
        r"Rs\.?\s*" + AMOUNT + r",?\s*RRN\s+(?P<ref>\d+)",
        "Dear Customer, your AutoPay mandate is successfully revoked towards Netflix for Rs 649.00, "
        "RRN 534512345678. -ICICI Bank",
        bank="ICICI", channel=PaymentChannel.AUTOPAY, is_mandate_revocation=True,
    ),
    _template(
        "ICICI_CREDIT",
        r"Acct?\s+XX?(?P<account>\d+)\s+is\s+credited\s+with\s+Rs\.?\s*" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+from\s+(?P<merchant>.+?)\.?\s*UPI[:\s]*(?P<ref>\d+)",
        "Dear Customer, Acct XX494 is credited with Rs 5,000.00 on 10-Dec-25 from RAMESH SHARMA. "
        "UPI:534987654321-ICICI Bank.",
        bank="ICICI", channel=PaymentChannel.UPI, transaction_type=TransactionType.CREDIT,
    ),
    _template(
        "ICICI_UPI",
        r"INR\s+" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4})\s+"
        r"for\s+UPI\s+to\s+(?P<merchant>\S+).*?Ref[:\s]*(?P<ref>\d+)",
        "INR 499.00 debited from A/c XX1234 on 14-12-24 for UPI to merchant@ybl. Ref 987654321 -ICICI",
        bank="ICICI", channel=PaymentChannel.UPI,
    ),
    _template(
        "ICICI_UPI_ALT",
        r"Rs\.?\s*" + AMOUNT + r"\s+has\s+been\s+debited.*?account\s+\*\*(?P<account>\d+).*?UPI.*?to\s+"
        r"(?P<merchant>\S+).*?Ref[:\s]*(?P<ref>\d+)",
        "Rs.300.00 has been debited from your account **4321 via UPI to chaiwala@paytm on 12-Dec-24. "
        "Ref: 434512345678 -ICICI Bank",
        base_confidence=0.90, bank="ICICI", channel=PaymentChannel.UPI,
    ),
    _template(
        "SBI_UPI",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+to\s+VPA\s+(?P<merchant>\S+)\s+on\s+"
        r"(?P<date>\d{2}-\d{2}-\d{2,4}).*?UPI\s+Ref[:\s]*(?P<ref>\d+)",
        "Rs.1200 debited from A/c XX1234 to VPA swiggy@upi on 14-12-24. UPI Ref 433218765432 -SBI",
        bank="SBI", channel=PaymentChannel.UPI,
    ),
    _template(
        "GENERIC_VPA_UPI",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+XX(?P<account>\d+)\s+to\s+VPA\s+(?P<merchant>\S+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4}).*?UPI\s+Ref[:\s]*(?P<ref>\d+)",
        "Rs.450 debited from A/c XX9876 to VPA zomato@ybl on 14-Dec-24. UPI Ref 433212345678. Kotak Bank",
        channel=PaymentChannel.UPI,
    ),
    _template(
        "AXIS_UPI",
        r"INR\s+" + AMOUNT + r"\s+debited\s+from\s+A/c\s+no\.\s*XX(?P<account>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+for\s+UPI-(?P<merchant>.+?)\.?\s+UPI\s+Ref[:\s]*(?P<ref>\d+)",
        "INR 820.00 debited from A/c no. XX3344 on 11-Dec-24 for UPI-BLINKIT. UPI Ref: 434411112222 -Axis Bank",
        bank="AXIS", channel=PaymentChannel.UPI,
    ),
    _template(
        "AXIS_AUTOPAY",
        r"INR\s+" + AMOUNT + r"\s+debited\s+from\s+A/c\s+(?:no\.\s*)?XX(?P<account>\d+)\s+via\s+NACH\s+for\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "INR 2,999.00 debited from A/c no. XX3344 via NACH for BAJAJ FINSERV on 05-Jan-25. -Axis Bank",
        bank="AXIS", channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "HDFC_AUTOPAY",
        r"Auto\s+Debit\s+of\s+Rs\.?" + AMOUNT + r"\s+from\s+HDFC\s+Bank\s+A/C\s+\*(?P<account>\d+)\s+for\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}[-/]\d{2}[-/]\d{2,4})",
        "Auto Debit of Rs.799.00 from HDFC Bank A/C *5678 for AIRTEL POSTPAID on 08/01/25",
        bank="HDFC", channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "HDFC_NACH",
        r"HDFC\s+Bank\s+A/c\s+XX(?P<account>\d+)\s+debited\s+Rs\.?\s*" + AMOUNT + r"\s+for\s+(?:NACH|ECS)\s+"
        r"(?:debit\s+)?towards\s+(?P<merchant>.+?)(?:\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4}))?" + SENTENCE_END,
        "HDFC Bank A/c XX5678 debited Rs.1,250.00 for NACH debit towards TATA AIA LIFE on 10-Jan-25. "
        "Avl bal Rs.20,000",
        bank="HDFC", channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "SBI_AUTOPAY",
        r"A/C\s+(?:XX)?(?P<account>\d+)?\s*debited\s+Rs\.?\s*" + AMOUNT + r"\s+towards\s+(?P<merchant>.+?)\s+"
        r"(?:Autopay|NACH|Mandate)\s+on\s+(?P<date>\d{2}[-/]\d{2}[-/]\d{2,4})",
        "Your SBI A/C XX7890 debited Rs.399.00 towards DISNEY HOTSTAR Autopay on 12-01-25",
        bank="SBI", channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "SBI_STANDING_INSTRUCTION",
        r"Rs\.?\s*" + AMOUNT + r"\s+debited\s+from\s+SBI\s+A/c\s+XX(?P<account>\d+)\s+by\s+Standing\s+"
        r"Instruction\s+for\s+(?P<merchant>.+?)(?:\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4}))?" + SENTENCE_END,
        "Rs.5,000 debited from SBI A/c XX7890 by Standing Instruction for RD ACCOUNT 1234 on 15-Jan-25.",
        bank="SBI", channel=PaymentChannel.STANDING_INSTRUCTION, is_subscription_hint=True,
    ),
    _template(
        "GENERIC_MANDATE",
        r"Rs\.?\s*" + AMOUNT + r"\s+debited\s+(?:from\s+(?:A/c|Account)\s+XX(?P<account>\d+)\s+)?via\s+"
        r"(?:NACH|mandate|autopay|standing\s+instruction)\s+(?:for|towards)\s+(?P<merchant>.+?)"
        r"(?:\s+on\s+(?P<date>\d{2}[-/]\w{2,3}[-/]\d{2,4}))?" + SENTENCE_END,
        "Rs.999 debited from A/c XX2468 via mandate towards CULT FIT on 03-Feb-25. Kotak Bank",
        flags=re.DOTALL, base_confidence=0.90, channel=PaymentChannel.AUTOPAY, is_subscription_hint=True,
    ),
    _template(
        "GENERIC_SUBSCRIPTION",
        r"Rs\.?\s*" + AMOUNT + r"\s+(?:debited|charged)\s+(?:from\s+(?:A/c|Account)\s+XX(?P<account>\d+)\s+)?"
        r"for\s+(?:your\s+)?(?P<merchant>.+?)\s+subscription",
        "Rs.119 charged for your Apple Music subscription. Kotak Bank",
        base_confidence=0.90, channel=PaymentChannel.UNKNOWN, is_subscription_hint=True,
    ),
]


# ----------------------------
# Credit card spends
# ----------------------------
CREDIT_CARD_TEMPLATES = [
    _template(
        "ICICI_CC_SPENT_INR",
        r"INR\s+" + AMOUNT + r"\s+spent\s+using\s+ICICI\s+Bank\s+Card\s+XX(?P<card>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+on\s+(?P<merchant>.+?)\.?\s*(?:Avl|If\s+not|$)",
        "INR 1,299.00 spent using ICICI Bank Card XX9004 on 14-Dec-25 on AMAZON PAY IN. "
        "Avl Limit: INR 1,20,000.00. If not you, call 1800 2662/SMS BLOCK 9004 to 9215676766",
        bank="ICICI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "ICICI_CC_SPENT_USD",
        r"USD\s+" + AMOUNT + r"\s+spent\s+using\s+ICICI\s+Bank\s+Card\s+XX(?P<card>\d+)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})\s+on\s+(?P<merchant>.+?)\.?\s*(?:Avl|If\s+not|$)",
        "USD 20.00 spent using ICICI Bank Card XX9004 on 02-Dec-25 on OPENAI *CHATGPT SUBSCR. "
        "Avl Limit: INR 98,765.00",
        bank="ICICI", currency="USD", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "AXIS_CC_MULTILINE",
        r"Spent\s+INR\s+" + AMOUNT + r"\s+Axis\s+Bank\s+Card\s+no\.\s*XX(?P<card>\d+)\s+"
        r"(?P<date>\d{2}-\d{2}-\d{2})\s+\d{2}:\d{2}:\d{2}\s+IST\s+(?P<merchant>.+?)\s+Avl\s+Limit",
        "Spent\nINR 349\nAxis Bank Card no. XX7712\n14-12-25 19:45:10 IST\nDOMINOS PIZZA\n"
        "Avl Limit: INR 45,000\nNot you? SMS BLOCK 7712 to 919951860002",
        flags=re.DOTALL, bank="AXIS", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "HDFC_CC",
        r"HDFC\s+Bank\s+Credit\s+Card\s+XX(?P<card>\d{4})\s+has\s+been\s+used\s+for\s+Rs\.?" + AMOUNT + r"\s+at\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4})",
        "HDFC Bank Credit Card XX4523 has been used for Rs.2340.00 at AMAZON on 14-12-24 at 14:30:45",
        bank="HDFC", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "HDFC_CC_ALERT",
        r"HDFC\s+Credit\s+Card\s+XX(?P<card>\d{4})\s+has\s+been\s+used\s+for\s+Rs\.?" + AMOUNT + r"\s+at\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4})",
        "Alert: HDFC Credit Card XX4523 has been used for Rs.560.00 at BOOKMYSHOW on 20-12-24",
        bank="HDFC", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "ICICI_CC",
        r"ICICI\s+Card\s+ending\s+(?P<card>\d{4})\s+used\s+for\s+INR\s+" + AMOUNT + r"\s+at\s+(?P<merchant>.+?)\s+"
        r"on\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Alert: ICICI Card ending 8976 used for INR 5550.00 at CROMA ELECTRONICS on 14-Dec-24",
        bank="ICICI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "ICICI_CC_ALT",
        r"ICICI\s+Credit\s+Card\s+XX(?P<card>\d{4})\s+was\s+used\s+for\s+Rs\.?" + AMOUNT + r"\s+at\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}/\d{2}/\d{4})",
        "ICICI Credit Card XX1122 was used for Rs.899.00 at DECATHLON on 22/12/2024",
        bank="ICICI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "SBI_CC",
        r"SBI\s+Card\s+ending\s+(?P<card>\d{4})\s+was\s+used\s+for\s+Rs\.?" + AMOUNT + r"\s+at\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}/\d{2}/\d{4})",
        "Your SBI Card ending 3456 was used for Rs.649 at NETFLIX.COM on 14/12/2024",
        bank="SBI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "SBI_CC_TXN",
        r"SBI\s+Card\s+XX(?P<card>\d{4})\s+txn\s+of\s+Rs\.?" + AMOUNT + r"\s+at\s+(?P<merchant>.+?)\s+on\s+"
        r"(?P<date>\d{2}-\w{3}-\d{4})",
        "SBI Card XX3456 txn of Rs.1,150.00 at RELIANCE TRENDS on 05-Jan-2025",
        bank="SBI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "AXIS_CC",
        r"Axis\s+Bank\s+Credit\s+Card\s+ending\s+(?P<card>\d{4})\s+was\s+used\s+for\s+Rs\.?" + AMOUNT + r"\s+at\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Axis Bank Credit Card ending 7712 was used for Rs.2,100 at IKEA on 09-Jan-25",
        bank="AXIS", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "GOOGLE_PLAY",
        r"Google\s+Play\s+charged\s+Rs\.?" + AMOUNT + r"\s+to\s+your\s+card\s+ending\s+(?P<card>\d{4})\s+for\s+"
        r"(?P<merchant>.+?)(?:\s+subscription)?\.?$",
        "Google Play charged Rs.129 to your card ending 4523 for YouTube Premium subscription",
        channel=PaymentChannel.CREDIT_CARD, is_subscription_hint=True,
    ),
    _template(
        "NETFLIX",
        r"Netflix\s+subscription\s+of\s+Rs\.?" + AMOUNT + r"\s+has\s+been\s+renewed.*?card\s+XX(?P<card>\d{4})",
        "Your Netflix subscription of Rs.649 has been renewed using card XX4523.",
        merchant="Netflix", channel=PaymentChannel.CREDIT_CARD, is_subscription_hint=True,
    ),
    _template(
        "AMAZON_PRIME",
        r"Amazon\s+Prime\s+membership\s+renewed.*?Rs\.?" + AMOUNT + r"\s+charged\s+to\s+card\s+ending\s+"
        r"(?P<card>\d{4})",
        "Amazon Prime membership renewed. Rs.1499 charged to card ending 4523.",
        merchant="Amazon Prime", channel=PaymentChannel.CREDIT_CARD, is_subscription_hint=True,
    ),
    _template(
        "SPOTIFY",
        r"Spotify\s+Premium\s+renewed.*?Rs\.?" + AMOUNT + r"\s+charged\s+to\s+card\s+XX(?P<card>\d{4})",
        "Spotify Premium renewed. Rs.119 charged to card XX4523.",
        merchant="Spotify Premium", channel=PaymentChannel.CREDIT_CARD, is_subscription_hint=True,
    ),
    _template(
        "ICICI_CC_STANDING_USD",
        r"successfully\s+processed\s+the\s+payment\s+of\s+USD\s+" + AMOUNT + r"\s+for\s+(?P<merchant>.+?),\s+"
        r"as\s+per\s+the\s+Standing\s+Instruction\s+\w+,\s+on\s+(?P<date>\d{2}/\d{2}/\d{4})\s+for\s+your\s+"
        r"ICICI\s+Bank\s+Credit\s+Card\s+(?P<card>\d{4})",
        "We have successfully processed the payment of USD 20.00 for OPENAI LLC, as per the Standing "
        "Instruction SI123456, on 02/12/2025 for your ICICI Bank Credit Card 9004.",
        bank="ICICI", currency="USD", channel=PaymentChannel.STANDING_INSTRUCTION, is_subscription_hint=True,
    ),
    _template(
        "ICICI_CC_STANDING_INR",
        r"successfully\s+processed\s+the\s+payment\s+of\s+INR\s+" + AMOUNT + r"\s+for\s+(?P<merchant>.+?),\s+"
        r"as\s+per\s+the\s+Standing\s+Instruction\s+\w+,\s+on\s+(?P<date>\d{2}/\d{2}/\d{4})\s+for\s+your\s+"
        r"ICICI\s+Bank\s+Credit\s+Card\s+(?P<card>\d{4})",
        "We have successfully processed the payment of INR 499.00 for YOUTUBE PREMIUM, as per the Standing "
        "Instruction SI654321, on 05/12/2025 for your ICICI Bank Credit Card 9004.",
        bank="ICICI", channel=PaymentChannel.STANDING_INSTRUCTION, is_subscription_hint=True,
    ),
]


# ----------------------------
# Bank of Baroda account transfers
# ----------------------------
BANK_TRANSFER_TEMPLATES = [
    _template(
        "BOB_TRANSFER",
        r"Rs\.?" + AMOUNT + r"\s+transferred\s+from\s+A/c\s+\.{3}(?P<account>\d+)\s+to[:\s]*(?P<merchant>.+?)\.?\s*"
        r"(?:Total\s+Bal|Bal\s+Rs|$)",
        "Rs.2000 transferred from A/c ...4321 to:RAJESH KUMAR. Total Bal:Rs.15000.00CR. "
        "Avlbl Amt:Rs.15000.00 -Bank of Baroda",
        bank="BOB", channel=PaymentChannel.UNKNOWN,
    ),
    _template(
        "BOB_DEBIT",
        r"Rs\.?" + AMOUNT + r"\s+debited\s+from\s+A/c\s+\.{3}(?P<account>\d+)\s+(?:for\s+)?(?:UPI\s+)?(?:to\s+)?"
        r"(?P<merchant>.+?)\.?\s*(?:Ref[:\s]*(?P<ref>\d+)|Total\s+Bal|Bal|$)",
        "Rs.150.00 debited from A/c ...4321 for UPI to CHAI POINT. Ref:434598765432. "
        "Total Bal:Rs.14850.00CR -Bank of Baroda",
        bank="BOB", channel=PaymentChannel.UPI,
    ),
    _template(
        "BOB_CREDIT",
        r"A/c\s+\.{3}(?P<account>\d+)\s+credited\s+with\s+(?:INR|Rs\.?)\s*" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{4}-\d{2}-\d{2}).*?(?:UPI\s+Ref\s+No\s+(?P<ref>\d+)|from\s+(?P<merchant>[^.]+)|$)",
        "Dear BOB Customer, A/c ...4321 credited with INR 25,000.00 on 2025-01-01 from ACME PAYROLL. "
        "Total Bal:Rs.40000.00CR",
        bank="BOB", channel=PaymentChannel.UNKNOWN, transaction_type=TransactionType.CREDIT,
        defaults={"merchant": "Bank Transfer"},
    ),
    _template(
        "BOB_CREDIT_ALT",
        r"(?:INR|Rs\.?)\s*" + AMOUNT + r"\s+credited\s+to\s+A/c\s+\.{3}(?P<account>\d+)\s+from\s+"
        r"(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{4})",
        "Rs.3,500 credited to A/c ...4321 from SURESH on 02-01-2025. Total Bal:Rs.43500.00CR -BOB",
        bank="BOB", channel=PaymentChannel.UNKNOWN, transaction_type=TransactionType.CREDIT,
    ),
    _template(
        "BOB_UPI",
        r"A/c\s+\.{3}(?P<account>\d+)\s+is\s+debited\s+for\s+Rs\.?" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{2}-\d{2}-\d{2,4})\s+for\s+UPI\s+txn.*?Ref[:\s]*(?P<ref>\d+)",
        "A/c ...4321 is debited for Rs.75.00 on 03-01-25 for UPI txn. Ref:500312345678 -Bank of Baroda",
        bank="BOB", merchant="UPI Payment", channel=PaymentChannel.UPI,
    ),
    _template(
        "BOB_NEFT",
        r"Rs\.?" + AMOUNT + r"\s+transferred\s+via\s+(?P<rail>NEFT|IMPS)\s+from\s+A/c\s+\.{3}(?P<account>\d+)\s+"
        r"to\s+(?P<merchant>.+?)\s+on\s+(?P<date>\d{2}-\d{2}-\d{2,4}).*?Ref[:\s]*(?P<ref>\w+)",
        "Rs.10,000 transferred via NEFT from A/c ...4321 to PRIYA SHARMA on 04-01-25. "
        "Ref:BARBN25004123456 -Bank of Baroda",
        bank="BOB", channel=PaymentChannel.NEFT, resolve=_channel_from_rail,
    ),
    _template(
        "BOB_UPI_USER_CREDIT",
        r"Dear\s+BOB\s+UPI\s+User:\s+Your\s+account\s+is\s+credited\s+with\s+INR\s+" + AMOUNT + r"\s+on\s+"
        r"(?P<date>\d{4}-\d{2}-\d{2}).*?UPI\s+Ref\s+No\s+(?P<ref>\d+)",
        "Dear BOB UPI User: Your account is credited with INR 500.00 on 2025-01-05 11:22:33 "
        "by UPI Ref No 500512345678",
        bank="BOB", merchant="UPI Credit", channel=PaymentChannel.UPI,
        transaction_type=TransactionType.CREDIT,
    ),
]


# ----------------------------
# Credit card statements
# ----------------------------
BILL_TEMPLATES = [
    _template(
        "HDFC_BILL",
        r"HDFC\s+Credit\s+Card\s+XX(?P<card>\d{4})\s+statement.*?Total\s+Due[:\s]*Rs\.?(?P<total>[0-9,]+\.?\d*)"
        r".*?Min\s+Due[:\s]*Rs\.?(?P<minimum>[0-9,]+\.?\d*).*?Due\s+Date[:\s]*(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Your HDFC Credit Card XX4523 statement is ready. Total Due: Rs.12450. Min Due: Rs.625. "
        "Due Date: 05-Jan-25",
        flags=re.DOTALL, bank="HDFC", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "HDFC_BILL_ALT",
        r"HDFC\s+Credit\s+Card\s+XX(?P<card>\d{4})\s+Bill[:\s]*Total\s+Due\s+Rs\.?(?P<total>[0-9,]+\.?\d*),?\s+"
        r"Min\s+Due\s+Rs\.?(?P<minimum>[0-9,]+\.?\d*),?\s+Due\s+Date\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "HDFC Credit Card XX4523 Bill: Total Due Rs.8,500, Min Due Rs.425, Due Date 10-Feb-25",
        bank="HDFC", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "ICICI_BILL",
        r"ICICI\s+Card\s+bill\s+generated.*?Amount[:\s]*Rs\.?(?P<total>[0-9,]+\.?\d*).*?Due[:\s]*"
        r"(?P<date>\d{2}-\w{3}-\d{2,4})",
        "ICICI Card bill generated. Amount: Rs.3200. Due: 12-Jan-25. Pay now to avoid charges.",
        flags=re.DOTALL, bank="ICICI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "ICICI_BILL_FULL",
        r"ICICI\s+Credit\s+Card\s+XX(?P<card>\d{4})\s+bill\s+is\s+Rs\.?(?P<total>[0-9,]+\.?\d*).*?Min\s+Due[:\s]*"
        r"Rs\.?(?P<minimum>[0-9,]+\.?\d*).*?Due\s+Date[:\s]*(?P<date>\d{2}-\w{3}-\d{2,4})",
        "Your ICICI Credit Card XX9004 bill is Rs.15,230.50. Min Due: Rs.770. Due Date: 20-Jan-25",
        flags=re.DOTALL, bank="ICICI", channel=PaymentChannel.CREDIT_CARD,
    ),
    _template(
        "SBI_BILL",
        r"SBI\s+Card\s+XX(?P<card>\d{4})\s+Statement[:\s]*Total\s+Due\s+Rs\.?(?P<total>[0-9,]+\.?\d*),?\s+"
        r"Min\s+Due\s+Rs\.?(?P<minimum>[0-9,]+\.?\d*),?\s+Due\s+by\s+(?P<date>\d{2}-\w{3}-\d{2,4})",
        "SBI Card XX3456 Statement: Total Due Rs.6,780, Min Due Rs.340, Due by 15-Jan-25",
        bank="SBI", channel=PaymentChannel.CREDIT_CARD,
    ),
]


TEMPLATE_CATALOGS: Dict[str, List[MessageTemplate]] = {
    "fastag": FASTAG_TEMPLATES,
    "prepaid_card": PREPAID_CARD_TEMPLATES,
    "emi": EMI_TEMPLATES,
    "insurance": INSURANCE_TEMPLATES,
    "investment": INVESTMENT_TEMPLATES,
    "bank_charge": BANK_CHARGE_TEMPLATES,
    "upi": UPI_TEMPLATES,
    "credit_card": CREDIT_CARD_TEMPLATES,
    "bank_transfer": BANK_TRANSFER_TEMPLATES,
}
