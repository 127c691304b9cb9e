from __future__ import annotations

from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.roster.repository import SchoolRepository
from src.school_attendance.school_attendance.storage.codec import dumps_schools


def _school_with_classes(repo: SchoolRepository, *names: str):
    school = repo.add_school("Escola")
    classes = [repo.add_class(school.id, n) for n in names]
    return school, classes


def test_add_school_trims_and_becomes_active(repo, bridge):
    school = repo.add_school("  Escola Central  ")

    assert school is not None
    assert school.name == "Escola Central"
    assert repo.active_school_id == school.id
    assert repo.active_class_id is None
    assert bridge.saves == 1


def test_add_school_blank_name_is_noop(repo, bridge):
    assert repo.add_school("   ") is None
    assert repo.schools == ()
    assert bridge.saves == 0


def test_delete_active_school_selects_previous_sibling(repo):
    a = repo.add_school("A")
    b = repo.add_school("B")
    c = repo.add_school("C")
    assert repo.active_school_id == c.id

    repo.set_active_school(b.id)
    assert repo.delete_school(b.id)

    assert repo.active_school_id == a.id
    assert [s.name for s in repo.schools] == ["A", "C"]


def test_delete_first_active_school_selects_index_zero(repo):
    a = repo.add_school("A")
    b = repo.add_school("B")
    repo.set_active_school(a.id)

    repo.delete_school(a.id)

    assert repo.active_school_id == b.id


def test_delete_last_school_clears_selection(repo):
    a = repo.add_school("A")

    repo.delete_school(a.id)

    assert repo.active_school_id is None
    assert repo.active_class_id is None


def test_delete_inactive_school_keeps_selection(repo):
    a = repo.add_school("A")
    b = repo.add_school("B")

    repo.delete_school(a.id)

    assert repo.active_school_id == b.id


def test_delete_unknown_school_is_noop(repo, bridge):
    repo.add_school("A")
    saves = bridge.saves

    assert repo.delete_school("missing") is False
    assert bridge.saves == saves


def test_delete_school_cascades(repo):
    school, (turma,) = _school_with_classes(repo, "Turma A")
    student = repo.add_student(turma.id, "Ana")
    other = repo.add_school("Outra")

    repo.delete_school(school.id)

    assert repo.get_school(school.id) is None
    assert repo.get_class(turma.id) is None
    assert repo.find_class_owner(turma.id) is None
    assert repo.check_in_by_scanned_id(turma.id, student.id, "2024-02-01") is None
    assert repo.active_school_id == other.id


def test_add_class_sets_class_and_owner_active(repo):
    first = repo.add_school("A")
    second = repo.add_school("B")

    turma = repo.add_class(first.id, " 5º Ano ")

    assert turma.name == "5º Ano"
    assert repo.active_school_id == first.id
    assert repo.active_class_id == turma.id
    assert repo.get_school(second.id).classes == []


def test_add_class_rejects_blank_name_and_unknown_school(repo, bridge):
    school = repo.add_school("A")
    saves = bridge.saves

    assert repo.add_class(school.id, "") is None
    assert repo.add_class("missing", "Turma") is None
    assert bridge.saves == saves


def test_delete_active_class_selects_previous_sibling(repo):
    _, (a, b, c) = _school_with_classes(repo, "A", "B", "C")
    repo.set_active_class(c.id)

    repo.delete_class(c.id)
    assert repo.active_class_id == b.id

    repo.set_active_class(a.id)
    repo.delete_class(a.id)
    assert repo.active_class_id == b.id

    repo.delete_class(b.id)
    assert repo.active_class_id is None


def test_delete_class_cascades_students(repo):
    _, (turma,) = _school_with_classes(repo, "A")
    repo.add_student(turma.id, "Ana")

    assert repo.delete_class(turma.id)
    assert repo.get_class(turma.id) is None


def test_selecting_school_moves_class_pointer_to_its_first_class(repo):
    s1, (c1,) = _school_with_classes(repo, "A")
    s2 = repo.add_school("B")
    c2 = repo.add_class(s2.id, "B1")
    repo.add_class(s2.id, "B2")

    repo.set_active_school(s1.id)
    assert repo.active_class_id == c1.id

    repo.set_active_school(s2.id)
    assert repo.active_class_id == c2.id


def test_set_active_unknown_ids_are_noops(repo):
    _, (turma,) = _school_with_classes(repo, "A")

    assert repo.set_active_school("missing") is False
    assert repo.set_active_class("missing") is False
    assert repo.active_class_id == turma.id


def test_add_student_validation(repo):
    _, (turma,) = _school_with_classes(repo, "A")

    assert repo.add_student(turma.id, "  ") is None
    assert repo.add_student("missing", "Ana") is None

    ana = repo.add_student(turma.id, " Ana ")
    assert ana.name == "Ana"
    assert ana.attendance == {}
    assert repo.get_class(turma.id).students == [ana]


def test_bulk_add_students_skips_blank_lines(repo):
    _, (turma,) = _school_with_classes(repo, "A")

    created = repo.bulk_add_students(turma.id, "Ana\n\nBob\n  \nCara")

    assert [s.name for s in created] == ["Ana", "Bob", "Cara"]
    assert [s.name for s in repo.get_class(turma.id).students] == ["Ana", "Bob", "Cara"]
    assert len({s.id for s in created}) == 3


def test_bulk_add_students_handles_crlf_and_unknown_class(repo):
    _, (turma,) = _school_with_classes(repo, "A")

    assert repo.bulk_add_students("missing", "Ana") == []
    created = repo.bulk_add_students(turma.id, "Ana\r\nBob\r\n\r\n")

    assert [s.name for s in created] == ["Ana", "Bob"]


def test_delete_and_clear_students(repo):
    _, (turma,) = _school_with_classes(repo, "A")
    ana, bob = repo.bulk_add_students(turma.id, "Ana\nBob")

    assert repo.delete_student(turma.id, ana.id)
    assert repo.delete_student(turma.id, ana.id) is False
    assert repo.get_class(turma.id).students == [bob]

    assert repo.clear_students(turma.id)
    assert repo.get_class(turma.id).students == []


def test_set_attendance_overwrites_and_rejects_pending(repo):
    _, (turma,) = _school_with_classes(repo, "A")
    ana = repo.add_student(turma.id, "Ana")

    assert repo.set_attendance(turma.id, ana.id, "2024-02-01", AttendanceStatus.ABSENT)
    assert repo.set_attendance(turma.id, ana.id, "2024-02-01", AttendanceStatus.JUSTIFIED)
    assert repo.set_attendance(turma.id, ana.id, "2024-02-02", AttendanceStatus.PENDING) is False
    assert repo.set_attendance(turma.id, "missing", "2024-02-02", AttendanceStatus.PRESENT) is False

    assert ana.attendance == {"2024-02-01": AttendanceStatus.JUSTIFIED}


def test_check_in_by_scanned_id_marks_present(repo):
    _, (turma,) = _school_with_classes(repo, "A")
    ana = repo.add_student(turma.id, "Ana")

    assert repo.check_in_by_scanned_id(turma.id, ana.id, "2024-02-01") == "Ana"
    assert ana.status_on("2024-02-01") == AttendanceStatus.PRESENT


def test_check_in_unknown_id_changes_nothing(repo, bridge):
    _, (turma,) = _school_with_classes(repo, "A")
    ana = repo.add_student(turma.id, "Ana")
    repo.set_attendance(turma.id, ana.id, "2024-02-01", AttendanceStatus.ABSENT)
    before = dumps_schools(list(repo.schools))
    saves = bridge.saves

    assert repo.check_in_by_scanned_id(turma.id, "not-a-student", "2024-02-01") is None

    assert dumps_schools(list(repo.schools)) == before
    assert bridge.saves == saves


def test_check_in_is_scoped_to_the_class(repo):
    school, (a, b) = _school_with_classes(repo, "A", "B")
    ana = repo.add_student(a.id, "Ana")

    assert repo.check_in_by_scanned_id(b.id, ana.id, "2024-02-01") is None


def test_state_survives_reload_through_bridge(repo, bridge):
    _, (turma,) = _school_with_classes(repo, "A", "B")
    ana = repo.add_student(turma.id, "Ana")
    repo.set_attendance(turma.id, ana.id, "2024-02-01", AttendanceStatus.PRESENT)

    reloaded = SchoolRepository(bridge)

    assert dumps_schools(list(reloaded.schools)) == dumps_schools(list(repo.schools))
    assert reloaded.active_school_id == repo.schools[0].id
    assert reloaded.active_class_id == turma.id


def test_hydrate_from_malformed_text_starts_empty(bridge):
    bridge.text = "{not json"

    repo = SchoolRepository(bridge)

    assert repo.schools == ()
    assert repo.active_school_id is None
