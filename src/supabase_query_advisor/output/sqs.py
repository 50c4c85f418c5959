import json
from dataclasses import asdict
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from aiobotocore.session import get_session

from supabase_query_advisor.domain import AdvisoryResult


class SqsAdvisoryOutput:
    """Publishes results that raised alerts to an SQS queue as JSON."""

    def __init__(
        self, queue_url: str, region: str = "us-east-1", alerts_only: bool = True
    ) -> None:
        self._queue_url = queue_url
        self._region = region
        self._alerts_only = alerts_only
        self._session = get_session()

    @property
    def name(self) -> str:
        return "sqs"

    async def send(self, result: AdvisoryResult) -> None:
        if self._alerts_only and not result.alerts:
            return
        async with self._session.create_client("sqs", region_name=self._region) as client:
            await client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=self._serialize_result(result),
            )

    def _serialize_result(self, result: AdvisoryResult) -> str:
        return json.dumps(asdict(result, dict_factory=self._dict_factory))

    @classmethod
    def _dict_factory(cls, items: list[tuple[str, Any]]) -> dict[str, Any]:
        return {key: cls._encode(value) for key, value in items}

    @staticmethod
    def _encode(value: Any) -> Any:
        # str and int enums never reach a json.dumps default hook
        if isinstance(value, IntEnum):
            return value.name.lower()
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return value.isoformat()
        return value
