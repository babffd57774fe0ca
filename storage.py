# storage.py
import json
import logging
from typing import Any, Optional

from models import db, StoredBlob

logger = logging.getLogger(__name__)


class BlobStorage:
    """Key-value persistence: each key holds one whole JSON collection."""

    def load(self, key: str) -> Optional[Any]:
        blob = db.session.get(StoredBlob, key)
        if blob is None:
            return None

        try:
            return json.loads(blob.value)
        except ValueError:
            logger.warning(f"Stored value for {key!r} is not valid JSON, using defaults")
            return None

    def save(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False)

        blob = db.session.get(StoredBlob, key)
        if blob is None:
            blob = StoredBlob(key=key, value=payload)
            db.session.add(blob)
        else:
            blob.value = payload

        db.session.commit()
        logger.debug(f"Saved {key}")
