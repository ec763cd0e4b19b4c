from __future__ import annotations

import pytest

from sysdump.sampler import CpuSampler
from tests.helpers import FakeProvider, RecordingSleep


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def sampler(sleep: RecordingSleep) -> CpuSampler:
    return CpuSampler(200, sleep=sleep)
