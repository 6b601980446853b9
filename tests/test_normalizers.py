"""
Normalizers: totality on malformed payloads, defaults, coercion and changeset ordering.
Run from project root: python -m pytest tests/test_normalizers.py -v
"""
import unittest

from schemas import ChangesetPage, Loan, LockRequestList, PricingScenario, RateSetPage
from services.normalizers import (
    parse_changesets,
    parse_loan,
    parse_lock_requests,
    parse_pe_rates,
    parse_pricing_scenario,
)
from utils.coerce import as_number

MALFORMED = [None, 0, 42.5, "text", True, [], [1, "x"], {}, {"unexpected": {"deep": [1]}}]


class TestTotality(unittest.TestCase):
    def test_every_parser_returns_its_shape_for_malformed_input(self):
        """No parser raises; each returns a fully populated record."""
        parsers = [
            (parse_changesets, ChangesetPage),
            (parse_pe_rates, RateSetPage),
            (parse_loan, Loan),
            (parse_lock_requests, LockRequestList),
            (parse_pricing_scenario, PricingScenario),
        ]
        for parse, model in parsers:
            for raw in MALFORMED:
                with self.subTest(parser=parse.__name__, raw=raw):
                    self.assertIsInstance(parse(raw), model)

    def test_wrong_field_types_degrade_to_defaults(self):
        loan = parse_loan({"borrower": "nope", "property": [1, 2], "loanTerm": {"a": 1}, "purpose": None})
        self.assertEqual(loan.borrower.first_name, "")
        self.assertIsNone(loan.borrower.fico)
        self.assertEqual(loan.property.city, "")
        self.assertIsNone(loan.loan_term)
        self.assertEqual(loan.purpose, "")

    def test_envelopes_with_wrong_types(self):
        self.assertEqual(parse_changesets({"changesets": "nope", "total": "many"}).changesets, [])
        self.assertEqual(parse_changesets({"changesets": "nope", "total": "many"}).total, 0)
        self.assertEqual(parse_pe_rates({"data": None}).items, [])
        self.assertEqual(parse_pe_rates({"data": {"items": {"id": 1}}}).total, 0)


class TestChangesets(unittest.TestCase):
    def test_missing_envelope_key_gives_fallback(self):
        page = parse_changesets({"total": 3})
        self.assertEqual(page, ChangesetPage())
        self.assertIsNone(page.next_page)

    def test_sorted_by_published_at_descending(self):
        page = parse_changesets(
            {
                "total": 3,
                "changesets": [
                    {"id": "old", "details": {"publishedAt": "2024-01-01T00:00:00Z"}},
                    {"id": "new", "details": {"publishedAt": "2024-03-01T00:00:00Z"}},
                    {"id": "mid", "details": {"publishedAt": "2024-02-01T00:00:00Z"}},
                ],
            }
        )
        self.assertEqual([cs.id for cs in page.changesets], ["new", "mid", "old"])
        self.assertEqual(page.total, 3)

    def test_equal_timestamps_keep_input_order(self):
        """Stable sort: ties keep their relative order; missing publishedAt sorts last."""
        page = parse_changesets(
            {
                "changesets": [
                    {"id": "no-date"},
                    {"id": "a", "details": {"publishedAt": "2024-01-02T00:00:00Z"}},
                    {"id": "b", "details": {"publishedAt": "2024-01-02T00:00:00Z"}},
                    {"id": "c", "details": {"publishedAt": "2024-05-01T00:00:00Z"}},
                ]
            }
        )
        self.assertEqual([cs.id for cs in page.changesets], ["c", "a", "b", "no-date"])

    def test_non_object_entries_dropped_and_fields_defaulted(self):
        page = parse_changesets(
            {
                "changesets": [
                    None,
                    "junk",
                    {
                        "id": 17,
                        "name": "Q1 rates",
                        "details": {"status": "Active"},
                        "versionInfo": {"basedOnId": 16, "additionsToBase": "4"},
                    },
                ],
                "nextPage": 2,
            }
        )
        self.assertEqual(len(page.changesets), 1)
        cs = page.changesets[0]
        self.assertEqual(cs.id, "17")
        self.assertEqual(cs.details.status, "Active")
        self.assertEqual(cs.details.published_at, "")
        self.assertEqual(cs.version_info.based_on_id, "16")
        self.assertEqual(cs.version_info.additions_to_base, 4)
        self.assertIsNone(cs.version_info.removals_from_base)
        self.assertEqual(page.next_page, "2")


class TestRates(unittest.TestCase):
    def test_requires_data_envelope(self):
        self.assertEqual(parse_pe_rates({"items": [{"id": "r1"}]}), RateSetPage())

    def test_optional_fields_only_when_present(self):
        page = parse_pe_rates(
            {
                "data": {
                    "items": [
                        {"id": 1, "changesetId": "cs-1", "isPublished": "yes"},
                        {"id": "r2", "changesetId": "cs-1", "baseRateSetId": "r1", "createdOn": "2024-01-01", "isPublished": True},
                        "junk",
                    ],
                    "total": 2,
                }
            }
        )
        self.assertEqual(page.total, 2)
        first, second = page.items
        self.assertEqual(first.id, "1")
        self.assertIsNone(first.base_rate_set_id)
        self.assertIsNone(first.is_published)
        self.assertEqual(second.base_rate_set_id, "r1")
        self.assertTrue(second.is_published)


class TestLoan(unittest.TestCase):
    def test_non_object_gives_default_loan(self):
        loan = parse_loan("not a loan")
        self.assertEqual(loan, Loan())
        self.assertEqual(loan.loan_officer.email, "")

    def test_fields_and_nested_records(self):
        loan = parse_loan(
            {
                "loanNumber": 1001,
                "losLoanId": "TESTREFI_12345",
                "amount": 350000.0,
                "loanTerm": "360",
                "borrower": {"firstName": "Ada", "fico": "741"},
                "property": {"zipCode": "94105", "appraisedValue": 500000},
                "loanofficer": {"name": "Pat Doe", "email": "pat@example.com"},
            }
        )
        self.assertEqual(loan.loan_number, "1001")
        self.assertEqual(loan.amount, "350000")
        self.assertEqual(loan.loan_term, 360)
        self.assertEqual(loan.borrower.fico, 741)
        self.assertEqual(loan.property.appraised_value, "500000")
        self.assertEqual(loan.loan_officer.name, "Pat Doe")
        self.assertEqual(loan.model_dump(by_alias=True)["loanOfficer"]["email"], "pat@example.com")


class TestLockRequests(unittest.TestCase):
    def test_requires_array(self):
        self.assertEqual(parse_lock_requests({"items": []}).items, [])

    def test_item_coercion(self):
        result = parse_lock_requests(
            [
                {
                    "id": "7",
                    "requestedOn": "2024-02-01T10:00:00Z",
                    "isAutoTriggered": "true",
                    "approvalMode": "AUTO_APPROVAL",
                    "buySide": {"peRequestId": "pe-1", "lockPeriod": "30", "investorId": "abc", "rate": 6.125},
                    "sellSide": {"investor": "X"},
                },
                "junk",
                None,
                {"buySide": None, "sellSide": {}},
            ]
        )
        self.assertEqual(len(result.items), 2)
        lock, bare = result.items
        self.assertEqual(lock.id, 7)
        self.assertTrue(lock.is_auto_triggered)
        self.assertTrue(lock.is_auto_approved)
        self.assertTrue(lock.has_sell_side)
        self.assertEqual(lock.buy_side.lock_period, 30)
        self.assertIsNone(lock.buy_side.investor_id)
        self.assertEqual(lock.buy_side.rate, "6.125")
        self.assertEqual(bare.id, 0)
        self.assertFalse(bare.has_sell_side)
        self.assertFalse(bare.is_auto_approved)
        self.assertEqual(bare.buy_side.pe_request_id, "")

    def test_sell_side_flag_comes_only_from_sell_side_terms(self):
        result = parse_lock_requests(
            [
                {"id": 1, "hasSellSide": True},
                {"id": 2, "has_sell_side": True},
                {"id": 3, "hasSellSide": False, "sellSide": {"investor": "X"}},
            ]
        )
        self.assertEqual([lock.has_sell_side for lock in result.items], [False, False, True])


class TestPricingScenario(unittest.TestCase):
    def test_numeric_coercion_maps_garbage_to_none(self):
        scenario = parse_pricing_scenario(
            {
                "borrower": {"fico": "740", "dtiRatio": "abc", "annualIncome": "NaN"},
                "loan": {"amount": "350000.50", "ltv": 80, "cltv": None},
                "property": {"appraisedValue": ""},
                "search": {"desiredLockPeriod": "45", "productCodes": ["A", 1, None], "loanTypes": "CONV"},
                "customValues": {"lenderCredit": 500},
            }
        )
        self.assertEqual(scenario.borrower.fico, 740)
        self.assertIsNone(scenario.borrower.dti_ratio)
        self.assertIsNone(scenario.borrower.annual_income)
        self.assertEqual(scenario.loan.amount, 350000.5)
        self.assertEqual(scenario.loan.ltv, 80)
        self.assertIsNone(scenario.loan.cltv)
        self.assertIsNone(scenario.property.appraised_value)
        self.assertEqual(scenario.search.desired_lock_period, 45)
        self.assertEqual(scenario.search.product_codes, ["A", "1", ""])
        self.assertEqual(scenario.search.loan_types, [])
        self.assertEqual(scenario.custom_values, {"lenderCredit": 500})

    def test_numeric_text_must_be_plain_decimal(self):
        self.assertEqual(as_number(" 42 "), 42)
        self.assertEqual(as_number("+5"), 5)
        self.assertEqual(as_number(".5"), 0.5)
        self.assertEqual(as_number("1e3"), 1000.0)
        self.assertEqual(as_number("-2.5E-1"), -0.25)
        for text in ("1_000", "0x1F", "inf", "Infinity", "nan", "1,000", "12abc", "."):
            with self.subTest(text=text):
                self.assertIsNone(as_number(text))
        self.assertIsNone(parse_pricing_scenario({"loan": {"amount": "350_000"}}).loan.amount)

    def test_records_are_immutable(self):
        scenario = parse_pricing_scenario({})
        with self.assertRaises(Exception):
            scenario.changeset_id = "cs-9"


if __name__ == "__main__":
    unittest.main()
