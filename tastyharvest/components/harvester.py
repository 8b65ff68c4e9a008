import hashlib
import json
from typing import Any

from tastyharvest.exceptions import ConfigurationError, HarvesterError
from tastyharvest.harvester.paginated import PaginatedHarvester
from tastyharvest.harvester.paginated.stream import EXHAUSTED
from tastyharvest.log import logger
from tastyharvest.models import HarvestResult, Operation, OperationType


class IncrementalHarvester:
    """Harvester that determines operations by comparing with previous state."""

    def __init__(self, harvester: PaginatedHarvester):
        self._harvester = harvester
        self.logger = logger.getChild(self.__class__.__name__)

    def run(self, state: dict[str, Any] | None = None) -> HarvestResult:
        """
        Run the harvester and detect changes compared to previous run.

        Each record is hashed and compared to the hash stored for its id. The
        verdict is reported back to the stream, which lets a partial run stop
        once it has caught up with already synchronized records.

        Args:
            state: State returned by the previous run, if any.

        Returns:
            HarvestResult: Records, operations (add/update/delete) and new state

        Raises:
            ConfigurationError: If the source cannot be planned
            HarvesterError: If there's an issue while processing records
        """
        previous_hashes: dict[str, str] = dict((state or {}).get("hashes") or {})
        current_hashes: dict[str, str] = {}
        records = []
        operations = []
        skipped = 0

        try:
            # Every run plans against the current upstream size
            self._harvester.count(refresh=True)
            stream = self._harvester.records()

            for record in stream:
                record_id = record.get("id") if isinstance(record, dict) else None
                if record_id is None:
                    self.logger.warning("Skipping record without an id")
                    skipped += 1
                    continue

                record_id = str(record_id)
                if record_id in current_hashes:
                    self.logger.debug(f"Skipping repeated record {record_id}")
                    continue

                content_hash = self._hash_content(record)
                previous_hash = previous_hashes.get(record_id)
                changed = previous_hash != content_hash
                stream.report(changed)

                if previous_hash is None:
                    operations.append(
                        Operation(
                            type=OperationType.ADD, record_id=record_id, record=record
                        )
                    )
                elif changed:
                    operations.append(
                        Operation(
                            type=OperationType.UPDATE,
                            record_id=record_id,
                            record=record,
                        )
                    )

                records.append(record)
                current_hashes[record_id] = content_hash

        except ConfigurationError:
            raise
        except Exception as e:
            self.logger.error(f"Error during harvester run: {e}")
            raise HarvesterError(
                f"Failed to retrieve or process items: {str(e)}"
            ) from e

        new_hashes = {**previous_hashes, **current_hashes}

        if previous_hashes and self._saw_everything(stream):
            for record_id in previous_hashes:
                if record_id not in current_hashes:
                    operations.append(
                        Operation(type=OperationType.DELETE, record_id=record_id)
                    )
                    del new_hashes[record_id]

        self.logger.info(
            "Harvested %s records, detected %s changes", len(records), len(operations)
        )

        return HarvestResult(
            records=records,
            operations=operations,
            state={"hashes": new_hashes},
            stop_reason=stream.stop_reason,
            skipped=skipped,
        )

    def _saw_everything(self, stream) -> bool:
        """Deletions are only safe to infer from a complete, undegraded run."""
        plan = self._harvester.plan
        return (
            stream.stop_reason == EXHAUSTED
            and stream.empty_pages == 0
            and plan.count >= plan.total_count
        )

    def _hash_content(self, content: dict) -> str:
        """
        Create a hash of record content for change detection.

        Args:
            content: The content to hash

        Returns:
            str: Hash string representing the content
        """
        # Sort keys for consistent hashing
        content_str = json.dumps(content, sort_keys=True, default=str)
        return hashlib.md5(content_str.encode("utf-8")).hexdigest()
