import pytest


@pytest.fixture
def r(request):
    """Result record handed to each test, same as the standalone runner does."""
    return request.module.TestResult(request.node.name)
