from __future__ import annotations

import logging

from ..common.ids import IdProvider
from .bridge import KeyValueStore
from .codec import dumps_schools, loads_legacy_classes

logger = logging.getLogger(__name__)


def migrate_legacy_classes(
    store: KeyValueStore,
    *,
    key: str,
    legacy_key: str,
    school_name: str,
    ids: IdProvider,
) -> bool:
    """Copy single-tier class data into the school-tree key, once.

    Runs only when `key` is unset; the legacy value is left in place.
    Returns True when something was migrated. Storage errors are logged and
    the migration is skipped, so startup continues.
    """
    try:
        if store.get(key) is not None:
            return False
        legacy_text = store.get(legacy_key)
    except OSError:
        logger.warning("Could not read storage, skipping legacy migration", exc_info=True)
        return False

    if legacy_text is None:
        return False

    schools = loads_legacy_classes(legacy_text, school_id=ids.new_id(), school_name=school_name)
    if not schools:
        return False

    try:
        store.set(key, dumps_schools(schools))
    except OSError:
        logger.error("Could not write migrated data under %r", key, exc_info=True)
        return False

    logger.info(
        "Migrated %d legacy class(es) from %r into school %r",
        len(schools[0].classes),
        legacy_key,
        school_name,
    )
    return True
