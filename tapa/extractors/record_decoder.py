"""
Decoding of Kubernetes/Tekton JSON objects into typed records.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..core.errors import RecordDecodeError
from ..core.types import (
    ContainerRecord,
    RunRecord,
    KIND_POD,
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_NOT_STARTED,
    STATUS_RUNNING,
)


class RecordDecoder:
    """Turns raw list items into RunRecord instances."""
    
    @staticmethod
    def parse_timestamp(value) -> Optional[datetime]:
        """
        Parse an RFC 3339 timestamp such as '2024-01-01T10:00:00Z'.
        
        Args:
            value: Timestamp string, or None/empty when unset
            
        Returns:
            Timezone-aware datetime, or None if the value is unset
            
        Raises:
            RecordDecodeError: If the value is not a valid timestamp
        """
        if value is None or value == '':
            return None
        if not isinstance(value, str):
            raise RecordDecodeError(f"timestamp must be a string, got {type(value).__name__}")
        
        text = value[:-1] + '+00:00' if value.endswith('Z') else value
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise RecordDecodeError(f"invalid timestamp '{value}'") from e
        
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    
    @staticmethod
    def _object(value, what: str) -> Dict:
        """Return value if it is an object (None counts as empty)."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise RecordDecodeError(f"{what} must be an object, got {type(value).__name__}")
        return value
    
    @staticmethod
    def _list(value, what: str) -> List:
        """Return value if it is a list (None counts as empty)."""
        if value is None:
            return []
        if not isinstance(value, list):
            raise RecordDecodeError(f"{what} must be a list, got {type(value).__name__}")
        return value
    
    @classmethod
    def run_status(cls, status: Dict) -> str:
        """
        Derive the status of a PipelineRun or TaskRun from its 'Succeeded' condition.
        """
        conditions = cls._list(status.get('conditions'), 'status.conditions')
        if not status.get('startTime'):
            return STATUS_NOT_STARTED
        
        for condition in conditions:
            if not isinstance(condition, dict) or condition.get('type') != 'Succeeded':
                continue
            value = condition.get('status')
            if value == 'True':
                return STATUS_COMPLETED
            if value == 'False':
                return STATUS_FAILED
        return STATUS_RUNNING
    
    @staticmethod
    def pod_status(status: Dict) -> str:
        """Derive the status of a Pod from its phase."""
        if not status.get('startTime'):
            return STATUS_NOT_STARTED
        
        phase = status.get('phase')
        if phase == 'Succeeded':
            return STATUS_COMPLETED
        if phase == 'Failed':
            return STATUS_FAILED
        return STATUS_RUNNING
    
    @classmethod
    def decode_containers(cls, spec: Dict, status: Dict) -> Tuple[ContainerRecord, ...]:
        """
        Join container statuses to the containers declared in the pod spec.
        
        Containers are returned in spec order; statuses for containers missing
        from the pod spec follow in status order.
        """
        statuses = {}
        status_order: List[str] = []
        for container_status in cls._list(status.get('containerStatuses'), 'status.containerStatuses'):
            if not isinstance(container_status, dict) or not isinstance(container_status.get('name'), str):
                raise RecordDecodeError("container status without a name")
            statuses[container_status['name']] = container_status
            status_order.append(container_status['name'])
        
        declared = []
        for container in cls._list(spec.get('containers'), 'spec.containers'):
            if not isinstance(container, dict) or not isinstance(container.get('name'), str):
                raise RecordDecodeError("container spec without a name")
            declared.append(container['name'])
        
        names = declared + [name for name in status_order if name not in declared]
        
        containers = []
        for name in names:
            state = cls._object(statuses.get(name, {}).get('state'), 'containerStatuses.state')
            terminated = cls._object(state.get('terminated'), 'state.terminated')
            if terminated:
                containers.append(ContainerRecord(
                    name=name,
                    terminated=True,
                    started_at=cls.parse_timestamp(terminated.get('startedAt')),
                    finished_at=cls.parse_timestamp(terminated.get('finishedAt')),
                ))
            else:
                containers.append(ContainerRecord(name=name))
        return tuple(containers)
    
    @classmethod
    def decode(cls, obj, expected_kind: str) -> Optional[RunRecord]:
        """
        Decode one list item.
        
        Args:
            obj: Raw JSON object
            expected_kind: Kind the caller asked for (PipelineRun, TaskRun or Pod)
            
        Returns:
            RunRecord, or None if the object is of a different kind
            
        Raises:
            RecordDecodeError: If the object does not have the expected structure
        """
        if not isinstance(obj, dict):
            raise RecordDecodeError(f"record must be an object, got {type(obj).__name__}")
        
        kind = obj.get('kind') or expected_kind
        if kind != expected_kind:
            return None
        
        metadata = obj.get('metadata')
        if not isinstance(metadata, dict) or not metadata.get('name'):
            raise RecordDecodeError("record has no metadata.name")
        if not isinstance(metadata['name'], str):
            raise RecordDecodeError("metadata.name must be a string")
        namespace = metadata.get('namespace') or ''
        if not isinstance(namespace, str):
            raise RecordDecodeError("metadata.namespace must be a string")
        
        status = cls._object(obj.get('status'), 'status')
        spec = cls._object(obj.get('spec'), 'spec')
        labels = cls._object(metadata.get('labels'), 'metadata.labels')
        
        if kind == KIND_POD:
            return RunRecord(
                kind=kind,
                namespace=namespace,
                name=metadata['name'],
                start_time=cls.parse_timestamp(status.get('startTime')),
                status=cls.pod_status(status),
                labels=dict(labels),
                containers=cls.decode_containers(spec, status),
            )
        
        return RunRecord(
            kind=kind,
            namespace=namespace,
            name=metadata['name'],
            start_time=cls.parse_timestamp(status.get('startTime')),
            completion_time=cls.parse_timestamp(status.get('completionTime')),
            status=cls.run_status(status),
            labels=dict(labels),
        )
