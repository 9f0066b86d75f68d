import pytest

from western_gpa.records import CourseRecord
from western_gpa.stats import average_percentage, overall_gpa, project_what_if, term_gpas


def _record(idx, percentage, credits, term="2024-Fall", is_valid=True):
    return CourseRecord(idx, f"COURSE {idx}", percentage, credits, term, is_valid)


def test_overall_gpa_is_credit_weighted():
    records = [_record(1, "85", "0.5"), _record(2, "72", "1")]
    assert overall_gpa(records) == pytest.approx((3.9 * 0.5 + 2.7) / 1.5)


def test_overall_gpa_ignores_invalid_and_unparseable_records():
    records = [
        _record(1, "90", "1"),
        _record(2, "10", "1", is_valid=False),
        _record(3, "", "1"),
        _record(4, "80", "abc"),
    ]
    assert overall_gpa(records) == pytest.approx(4.0)


def test_overall_gpa_without_records():
    assert overall_gpa([]) is None


def test_term_gpas_follow_calendar_order():
    records = [
        _record(1, "90", "1", "2025-Winter"),
        _record(2, "Summer", "1", "Summer School"),
        _record(3, "60", "1", "Summer School"),
        _record(4, "73", "0.5", "2024-Fall"),
        _record(5, "85", "0.5", "2024-Fall"),
    ]
    gpas = term_gpas(records)
    assert list(gpas) == ["2024-Fall", "2025-Winter", "Summer School"]
    assert gpas["2024-Fall"] == pytest.approx(3.45)
    assert gpas["2025-Winter"] == pytest.approx(4.0)
    assert gpas["Summer School"] == pytest.approx(1.7)


def test_what_if_exact_scale_value():
    projection = project_what_if([_record(1, "73", "2")], target_gpa=3.5, additional_credits=2)
    assert projection.required_gpa == pytest.approx(4.0)
    assert projection.achievable
    assert projection.required_percentage == 90


def test_what_if_off_scale_value_has_no_percentage():
    projection = project_what_if([_record(1, "73", "2")], target_gpa=3.2, additional_credits=2)
    assert projection.required_gpa == pytest.approx(3.4)
    assert projection.achievable
    assert projection.required_percentage is None


def test_what_if_unreachable_target():
    projection = project_what_if([_record(1, "73", "2")], target_gpa=4.0, additional_credits=1)
    assert projection.required_gpa == pytest.approx(6.0)
    assert not projection.achievable


def test_what_if_without_history():
    projection = project_what_if([], target_gpa=3.9, additional_credits=2)
    assert projection.required_gpa == pytest.approx(3.9)
    assert projection.required_percentage == 85


@pytest.mark.parametrize("target, credits", [(4.5, 2), (-0.1, 2), (3.0, 0), (3.0, -1)])
def test_what_if_rejects_bad_arguments(target, credits):
    with pytest.raises(ValueError):
        project_what_if([], target_gpa=target, additional_credits=credits)


def test_average_percentage_is_credit_weighted():
    records = [_record(1, "85", "0.5"), _record(2, "70", "1"), _record(3, "10", "1", is_valid=False)]
    assert average_percentage(records) == pytest.approx((85 * 0.5 + 70) / 1.5)
    assert average_percentage([]) is None
