"""
tests/test_ingestion.py
=======================
Carga masiva de empleados desde CSV.
"""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from employee_api.routers.ingestion import MAX_IMPORT_ROWS

from helpers import make_client

HEADER = "firstName,lastName,phone,zip,hireDate\n"


class TestImportCsv(unittest.TestCase):

    def setUp(self):
        self.client, self.engine = make_client()

    def tearDown(self):
        self.engine.dispose()

    def upload(self, content: str):
        files = {"file": ("employees.csv", content.encode("utf-8"), "text/csv")}
        return self.client.post("/employees/import/csv", files=files)

    def test_valid_and_invalid_rows(self):
        resp = self.upload(
            HEADER
            + "Ada,Lovelace,1234567890,10001,02/29/2024\n"
            + "Grace,,5551234567,02139,12/09/1906\n"
            + "Alan,Turing,12345,94103,06/23/1912\n"
            + "Linus,Torvalds,0123456789,00100,13/40/2024\n"
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["rows"], 4)
        self.assertEqual(body["created"], 1)
        self.assertEqual(body["rejected"], [
            {"rowIndex": 1, "reason": "The following fields are required: lastName"},
            {"rowIndex": 2, "reason": "Phone number must have 10 digits"},
            {"rowIndex": 3, "reason": "Date sent in wrong format"},
        ])
        employees = self.client.get("/employees").json()
        self.assertEqual(len(employees), 1)
        self.assertEqual(employees[0]["phone"], "(123) 456-7890")

    def test_leading_zeros_preserved(self):
        resp = self.upload(HEADER + "Linus,Torvalds,0123456789,00100,12/28/1969\n")
        self.assertEqual(resp.json()["created"], 1)
        emp = self.client.get("/employees").json()[0]
        self.assertEqual(emp["phone"], "(012) 345-6789")
        self.assertEqual(emp["zip"], "00100")

    def test_missing_columns(self):
        resp = self.upload("firstName,lastName\nAda,Lovelace\n")
        self.assertEqual(resp.status_code, 422)
        self.assertIn("phone", resp.json()["detail"])

    def test_header_only(self):
        resp = self.upload(HEADER)
        self.assertEqual(resp.status_code, 422)

    def test_empty_file(self):
        resp = self.upload("")
        self.assertEqual(resp.status_code, 422)

    def test_store_failure_leaves_no_rows(self):
        rows = "".join(f"Emp,Number{i},555000000{i},10001,01/0{i + 1}/2020\n" for i in range(4))
        exc = OperationalError("INSERT INTO employees", {}, Exception("connection lost"))
        with patch("sqlalchemy.orm.Session.commit", side_effect=exc):
            resp = self.upload(HEADER + rows)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {
            "message": "Something went wrong, please try again later",
            "succeeded": False,
        })
        self.assertEqual(self.client.get("/employees").json(), [])

    def test_retry_after_failure_does_not_duplicate(self):
        content = HEADER + "Ada,Lovelace,1234567890,10001,02/29/2024\n"
        exc = OperationalError("INSERT INTO employees", {}, Exception("connection lost"))
        with patch("sqlalchemy.orm.Session.commit", side_effect=exc):
            self.assertEqual(self.upload(content).status_code, 500)
        self.assertEqual(self.upload(content).json()["created"], 1)
        self.assertEqual(len(self.client.get("/employees").json()), 1)


# ===================================================================
# Row limit
# ===================================================================


def _rows(n: int) -> str:
    return "".join(f"First,Last{i},{i:010d},10001,03/15/2021\n" for i in range(n))


class TestImportLimit(unittest.TestCase):

    def setUp(self):
        self.client, self.engine = make_client()

    def tearDown(self):
        self.engine.dispose()

    def upload(self, content: str):
        files = {"file": ("employees.csv", content.encode("utf-8"), "text/csv")}
        return self.client.post("/employees/import/csv", files=files)

    def test_max_rows_accepted(self):
        resp = self.upload(HEADER + _rows(MAX_IMPORT_ROWS))
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["created"], MAX_IMPORT_ROWS)
        self.assertEqual(len(self.client.get("/employees").json()), MAX_IMPORT_ROWS)

    def test_one_over_max_rejected(self):
        resp = self.upload(HEADER + _rows(MAX_IMPORT_ROWS + 1))
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.client.get("/employees").json(), [])


if __name__ == "__main__":
    unittest.main()
