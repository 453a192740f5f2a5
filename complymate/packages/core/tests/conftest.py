"""packages/core 测试配置 -- 核心层 fixture"""

import pytest
from complymate.core.session import Session, create_session
from complymate.core.store import InMemoryAttachmentStore


@pytest.fixture
def attachment_store() -> InMemoryAttachmentStore:
    return InMemoryAttachmentStore()


@pytest.fixture
def session(directory, fixed_clock, attachment_store) -> Session:
    """基于 Alice/Bob 目录和固定时钟加载的会话"""
    return create_session(directory, clock=fixed_clock, attachment_store=attachment_store)
