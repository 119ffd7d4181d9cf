"""Row builders behind the ledger, document and matrix tables."""

from gramin_portal.ui.pages.documents import document_url, parse_documents
from gramin_portal.ui.pages.ledger import deposit_rows, loan_rows
from gramin_portal.ui.pages.vdf_matrix import matrix_rows
from gramin_portal.vdf.matrix import normalize_matrix


class TestLedgerRows:
    """Bank deposit and loan rows."""

    def test_deposit_row(self):
        rows = deposit_rows([{
            "id": 1, "memberName": "Sita", "depositDate": "2025-01-10", "amount": 1000,
            "currentInterest": 25.5, "currentTotal": 1025.5, "status": "ACTIVE",
        }])
        assert rows == [{
            "id": 1, "member": "Sita", "date": "10 Jan 2025", "amount": "₹1,000.00",
            "interest": "₹25.50", "total": "₹1,025.50", "status": "ACTIVE",
        }]

    def test_deposit_total_falls_back_to_amount(self):
        row = deposit_rows([{"amount": 500}])[0]
        assert row["total"] == "₹500.00"
        assert row["interest"] == "₹0.00"
        assert row["id"] == 0

    def test_active_loan_shows_paid_amount(self):
        row = loan_rows([{"loanAmount": 5000, "status": "ACTIVE", "paidAmount": 1000, "totalRepayment": 5600}])[0]
        assert row["paid"] == "₹1,000.00"

    def test_closed_loan_shows_total_repayment(self):
        row = loan_rows([{"loanAmount": 5000, "status": "CLOSED", "paidAmount": 1000, "totalRepayment": 5600}])[0]
        assert row["paid"] == "₹5,600.00"

    def test_empty(self):
        assert deposit_rows(None) == []
        assert loan_rows([]) == []


class TestDocuments:
    def test_document_url_shapes(self):
        assert document_url({"url": "https://files/x.pdf"}) == "https://files/x.pdf"
        assert document_url("https://files/y.pdf") == "https://files/y.pdf"
        assert document_url("") is None
        assert document_url(None) is None

    def test_parse_documents(self):
        docs = parse_documents([{"id": 1, "fileName": "a.pdf", "fileSize": 2048}])
        assert docs[0].id == "1"
        assert docs[0].file_name == "a.pdf"
        assert docs[0].file_size == 2048


class TestMatrixRows:
    def test_row_per_family(self):
        matrix = normalize_matrix({"year": 2025, "families": [{
            "familyConfigId": 3, "familyHeadName": "Das", "totalPaid": 40, "totalDue": 200,
            "paidMonths": [True, True] + [False] * 10, "exemptedMonths": [False, True] + [False] * 10,
        }]})
        row = matrix_rows(matrix, matrix.families)[0]
        assert row["id"] == "3"
        assert row["family"] == "Das"
        assert row["m1"] == "Paid"
        assert row["m2"] == "Exempt"
        assert row["m2_state"] == "exempt"
        assert row["m3_state"] == "unpaid"
        assert row["paid"] == "₹40.00"
        assert row["counts"] == "1/10"
