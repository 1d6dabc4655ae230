"""
Pytest configuration and shared fixtures for run analyzer tests.
"""
import json
import pytest

from helpers import make_list, make_pod, make_run


@pytest.fixture
def pipeline_run_list():
    """Three pipeline runs plus one still running and one never started."""
    return make_list('PipelineRun', [
        make_run('PipelineRun', 'build-1', 0, 100),
        make_run('PipelineRun', 'build-2', 50, 110),
        make_run('PipelineRun', 'deploy-1', 200, 230, succeeded='False'),
        make_run('PipelineRun', 'build-3', 10, None, succeeded='Unknown'),
        make_run('PipelineRun', 'build-4', None, None, succeeded=None),
    ])


@pytest.fixture
def task_run_list():
    """Task runs of build-1 (30s + 40s) and deploy-1 (25s)."""
    return make_list('TaskRun', [
        make_run('TaskRun', 'build-1-fetch', 0, 30),
        make_run('TaskRun', 'build-1-compile', 30, 70),
        make_run('TaskRun', 'deploy-1-apply', 202, 227),
    ])


@pytest.fixture
def pod_list():
    """Pods of the task runs above; the last one has no ownership label."""
    return make_list('Pod', [
        make_pod('build-1-fetch-pod', 1, [('step-clone', 2, 20), ('step-list', 2, 28)]),
        make_pod('build-1-compile-pod', 31, [('step-build', 32, 69)]),
        make_pod('deploy-1-apply-pod', 203, [('step-apply', 204, 226)]),
        make_pod('build-1-debug-pod', 0, [('shell', 0, 5)], pipeline_run=None),
    ])


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file and return a helper function."""
    counter = {'n': 0}
    
    def _create_file(data, name=None):
        counter['n'] += 1
        file_path = tmp_path / (name or f"test_{counter['n']}.json")
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w") as f:
            json.dump(data, f)
        return str(file_path)
    
    return _create_file
