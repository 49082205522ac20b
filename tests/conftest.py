"""
Pytest configuration and shared fixtures for scheduler tests.
"""
import pytest
from test_utils import create_test_job


@pytest.fixture
def four_jobs():
    """Two jobs at t=0 and two at t=1 with mixed bursts."""
    return [
        create_test_job("J1", 0, 4),
        create_test_job("J2", 0, 2),
        create_test_job("J3", 1, 6),
        create_test_job("J4", 1, 1),
    ]


@pytest.fixture
def rr_pair():
    """A long job first, a shorter one arriving while it runs."""
    return [
        create_test_job("J1", 0, 3),
        create_test_job("J2", 1, 2),
    ]


@pytest.fixture
def single_job():
    return [create_test_job("J1", 0, 3)]


@pytest.fixture
def early_finisher():
    """One job that ends inside a quantum, one that needs several quanta."""
    return [
        create_test_job("A", 0, 1.5),
        create_test_job("B", 0, 3),
    ]
