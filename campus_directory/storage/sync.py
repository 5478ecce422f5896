import logging
from typing import Dict

from campus_directory.errors import ValidationError
from campus_directory.storage.base import DirectoryStore

logger = logging.getLogger(__name__)


def sync_tree(source: DirectoryStore, target: DirectoryStore, dry_run: bool = False) -> Dict[str, int]:
    """
    Copy every department, section and student present in ``source`` but
    missing from ``target``. Existing target records are left untouched.

    The hosted store keys sections and students across the whole directory,
    while the nested file only scopes section ids per department. A record the
    target refuses as a duplicate is logged and counted under ``conflicts``;
    the sync carries on with the rest. A refused section skips its students
    too. Conflicts are only detected when writing, so a dry run reports none.

    Returns the number of records copied per entity type plus ``conflicts``.
    """
    counts = {"departments": 0, "sections": 0, "students": 0, "conflicts": 0}

    for dept in source.dump_tree():
        dept_id = dept["id"]
        if target.get_department(dept_id) is None:
            logger.info(f"Copying department {dept_id}")
            if not dry_run:
                target.create_department({"id": dept_id, "name": dept.get("name"), "code": dept.get("code")})
            counts["departments"] += 1

        for section in dept.get("sections") or []:
            sec_id = section["id"]
            students = section.get("students") or []
            if target.get_section(dept_id, sec_id) is None:
                logger.info(f"Copying section {dept_id}/{sec_id}")
                if not dry_run:
                    try:
                        target.create_section(dept_id, {"id": sec_id, "name": section.get("name")})
                    except ValidationError as e:
                        logger.warning(f"Skipping section {dept_id}/{sec_id} and its {len(students)} student(s): {e.message}")
                        counts["conflicts"] += 1 + len(students)
                        continue
                counts["sections"] += 1

            existing = set()
            if target.get_section(dept_id, sec_id) is not None:
                existing = {s.get("id") for s in target.list_students(dept_id, sec_id)}
            for student in students:
                if student.get("id") in existing:
                    continue
                logger.info(f"Copying student {student.get('id')} into {dept_id}/{sec_id}")
                if not dry_run:
                    try:
                        target.create_student(dept_id, sec_id, dict(student))
                    except ValidationError as e:
                        logger.warning(f"Skipping student {student.get('id')} in {dept_id}/{sec_id}: {e.message}")
                        counts["conflicts"] += 1
                        continue
                counts["students"] += 1

    logger.info(f"Sync finished: {counts}")
    return counts
