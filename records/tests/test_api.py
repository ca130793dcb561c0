"""
End-to-end flow through the records API.

A nurse logs in with username and password, records visits at the
clinic, and a manager responsible for that clinic reviews them.  Uses
Django REST Framework's APIClient within the APITestCase base class.

To run the tests:

```
pytest -q records/tests
```
"""

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import ClinicVisit, DailyTokenCounter, User


class ClinicFlowTests(APITestCase):
    def setUp(self) -> None:
        self.nurse = User.objects.create_user(
            username="nurse_qoz", password="nursepass", role="maleNurse", location_id="AL QOUZ",
        )
        self.manager = User.objects.create_user(
            username="manager_qoz", password="managerpass", role="manager", manager_locations=["AL QOUZ"],
        )

    def authenticate(self, username: str, password: str) -> APIClient:
        client = APIClient()
        resp = client.post(reverse("login_view"), {"username": username, "password": password}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        client.credentials(HTTP_AUTHORIZATION=f"Token {resp.data['token']}")
        return client

    def visit(self, emp_no: str, **extra) -> dict:
        data = {
            "date": timezone.localdate().isoformat(),
            "time": "08:15",
            "empNo": emp_no,
            "employeeName": "Worker " + emp_no,
            "emiratesId": "784-2000-0000000-0",
            "trLocation": "QOZ CAMP 2",
            "mobileNumber": "0500000000",
            "natureOfCase": "Illness",
            "caseCategory": "General",
        }
        data.update(extra)
        return data

    def test_nurse_visits_get_consecutive_tokens(self) -> None:
        client = self.authenticate("nurse_qoz", "nursepass")
        tokens = []
        for emp_no in ("AA0001", "AA0002", "AA0003"):
            resp = client.post("/api/clinic", self.visit(emp_no), format="json")
            self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
            tokens.append(resp.data["data"]["tokenNo"])
        day = timezone.localdate().strftime("%d%m")
        self.assertEqual(tokens, [f"QOZ-{day}-0001", f"QOZ-{day}-0002", f"QOZ-{day}-0003"])
        counter = DailyTokenCounter.objects.get(location_id="AL QOUZ")
        self.assertEqual(counter.seq, 3)

    def test_manager_prioritizes_repeat_visitors(self) -> None:
        nurse = self.authenticate("nurse_qoz", "nursepass")
        nurse.post("/api/clinic", self.visit("AA0001", sickLeaveStatus="Approved"), format="json")
        nurse.post("/api/clinic", self.visit("AA0001"), format="json")
        nurse.post("/api/clinic", self.visit("BB0002"), format="json")

        manager = self.authenticate("manager_qoz", "managerpass")
        resp = manager.get("/api/clinic/manager/prioritized")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        ranks = [(row["empNo"], row["rank"]) for row in resp.data["data"]]
        self.assertEqual(ranks, [("AA0001", 1), ("BB0002", 4)])

        # once called back, the employee drops out of the list
        latest = ClinicVisit.objects.filter(emp_no="AA0001").first()
        resp = manager.post("/api/member-feedback", {"employeeId": "AA0001", "clinicId": latest.id}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        resp = manager.get("/api/clinic/manager/prioritized")
        self.assertEqual([row["empNo"] for row in resp.data["data"]], ["BB0002"])
        self.assertEqual(resp.data["meta"]["excludedEmpNosCount"], 1)

    def test_nurse_cannot_reach_manager_views(self) -> None:
        client = self.authenticate("nurse_qoz", "nursepass")
        resp = client.get("/api/clinic/manager/by-employee")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        resp = client.get("/api/ip-admission")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
