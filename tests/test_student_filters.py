import datetime
from decimal import Decimal

from core.models import Payment, Settings, Student, StudentStatus
from core.student_filters import STATUS_FILTERS, filter_students, matches_search
from core.student_status_engine import StudentStatusEngine

D = datetime.date
SETTINGS = Settings(id=1, course_duration_days=25, fee_amount=Decimal("1000.00"))


def student(sid, name, place="Pune", phone="9876543210", admission=D(2024, 1, 1), active=True):
    return Student(id=sid, name=name, place=place, phone_number=phone,
                   admission_date=admission, is_active=active)


JOHN = student(1, "John Doe", place="Mumbai", phone="9000011111")
ASHA = student(2, "Asha Rao", place="Johannesburg", phone="9222233333", admission=D(2023, 6, 1))
RAVI = student(3, "Ravi Kumar", place="Nashik", phone="9444455555", admission=D(2023, 6, 1))
GONE = student(4, "John Gone", active=False)

PAYMENTS = [
    Payment(id=1, student_id=3, payment_date=D(2024, 1, 1), amount=Decimal("1000"),
            next_payment_date=D(2024, 1, 20)),
]


def status_of(now=D(2024, 1, 20)):
    return StudentStatusEngine(PAYMENTS, SETTINGS, now).status_for


class TestMatchesSearch:
    def test_name_case_insensitive(self):
        assert matches_search(JOHN, "joh")
        assert matches_search(JOHN, "DOE")

    def test_place_case_insensitive(self):
        assert matches_search(ASHA, "johannes")

    def test_phone_substring(self):
        assert matches_search(RAVI, "44455")
        assert not matches_search(RAVI, "99999")

    def test_empty_term_matches_everything(self):
        assert matches_search(JOHN, "")


class TestFilterStudents:
    def test_inactive_students_always_dropped(self):
        rows = filter_students([JOHN, GONE], "", "all", status_of())
        assert rows == [JOHN]

    def test_search_hits_name_and_place_in_order(self):
        rows = filter_students([JOHN, ASHA, RAVI], "joh", "all", status_of())
        assert rows == [JOHN, ASHA]

    def test_status_filter_excludes_active_match(self):
        # John was admitted 2024-01-01, next date 2024-01-26: still active on the 20th
        assert filter_students([JOHN], "joh", "active", status_of()) == [JOHN]
        assert filter_students([JOHN], "joh", "expired", status_of()) == []

    def test_each_status_filter(self):
        students = [JOHN, ASHA, RAVI]
        check = status_of(D(2024, 1, 20))
        assert filter_students(students, "", "active", check) == [JOHN]
        assert filter_students(students, "", "expired", check) == [ASHA]
        assert filter_students(students, "", "due_today", check) == [RAVI]

    def test_unknown_filter_behaves_like_all(self):
        rows = filter_students([JOHN, ASHA], "", "something-else", status_of())
        assert rows == [JOHN, ASHA]

    def test_filter_options(self):
        assert list(STATUS_FILTERS) == ["all", "active", "due_today", "expired"]

    def test_filter_labels_follow_status_labels(self):
        assert STATUS_FILTERS["all"] == "All Students"
        for status in StudentStatus:
            assert STATUS_FILTERS[status.value] == status.label
