"""
Factories for raw Kubernetes and Tekton objects used across the tests.
"""
from datetime import datetime, timedelta, timezone

BASE_TIME = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


def ts(seconds):
    """RFC 3339 timestamp `seconds` after BASE_TIME."""
    return (BASE_TIME + timedelta(seconds=seconds)).strftime('%Y-%m-%dT%H:%M:%SZ')


def at(seconds):
    """Datetime `seconds` after BASE_TIME."""
    return BASE_TIME + timedelta(seconds=seconds)


def make_run(kind, name, start=None, end=None, succeeded='True', namespace='ci'):
    """Raw PipelineRun/TaskRun object as returned by kubectl."""
    status = {}
    if start is not None:
        status['startTime'] = ts(start)
    if end is not None:
        status['completionTime'] = ts(end)
    if succeeded is not None:
        status['conditions'] = [{'type': 'Succeeded', 'status': succeeded}]
    return {
        'apiVersion': 'tekton.dev/v1beta1',
        'kind': kind,
        'metadata': {'name': name, 'namespace': namespace},
        'status': status,
    }


def make_pod(name, start=None, containers=(), phase='Succeeded', namespace='ci',
             pipeline_run='run', status_order=None):
    """
    Raw Pod object.
    
    `containers` is a sequence of (name, started, finished) in spec order;
    finished=None leaves the container running.
    """
    labels = {'tekton.dev/pipelineRun': pipeline_run} if pipeline_run else {}
    statuses = []
    for container_name, started, finished in containers:
        if finished is None:
            state = {'running': {'startedAt': ts(started)}}
        else:
            state = {'terminated': {'startedAt': ts(started), 'finishedAt': ts(finished), 'exitCode': 0}}
        statuses.append({'name': container_name, 'state': state})
    if status_order:
        statuses.sort(key=lambda s: status_order.index(s['name']))
    
    status = {'phase': phase, 'containerStatuses': statuses}
    if start is not None:
        status['startTime'] = ts(start)
    return {
        'apiVersion': 'v1',
        'kind': 'Pod',
        'metadata': {'name': name, 'namespace': namespace, 'labels': labels},
        'spec': {'containers': [{'name': c[0], 'image': 'busybox'} for c in containers]},
        'status': status,
    }


def make_list(kind, items):
    return {'apiVersion': 'v1', 'kind': f"{kind}List", 'items': items}
