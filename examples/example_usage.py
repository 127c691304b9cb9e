"""Example: use the repository and services directly (no Flask).

Controllers are a thin layer; the rules live in the repository and services.
"""

import importlib

from config import get_settings_module

from src.school_attendance.school_attendance.attendance.aggregator import summarize
from src.school_attendance.school_attendance.common.datetime_utils import today_iso
from src.school_attendance.school_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=vars(settings))
    repo = container.repository

    school = repo.active_school or repo.add_school("Escola Exemplo")
    school_class = repo.active_class or repo.add_class(school.id, "Turma A")
    print(summarize(school_class.students, today_iso()))


if __name__ == "__main__":
    main()
