"""
Pytest Configuration and Shared Fixtures

This module provides the core test configuration and shared fixtures for the
rental application portal.

Key Components:
--------------
1. Path Configuration:
   - Sets up project root path
   - Configures Python path for imports

2. Test Environment:
   - Settings dict shaped like config.settings.load_settings(), rooted in tmp_path
   - Zero redirect delay so post-submit navigation runs immediately

3. Providers:
   - Local identity provider with a preset federated identity
   - In-memory document store
   - Local object store under tmp_path

Fixtures:
---------
- test_settings: Portal settings for testing
- logs_manager: Uninitialized LogsManager (console only, silenced)
- identity / documents / objects: Local providers
- record_store / pipeline: Storage layer over the providers
- tenant_user: A signed-in tenant principal
- jane_fields: Every required field of a complete application
- controller: A started Controller wired to the providers above

Usage:
------
```python
async def test_something(controller, identity):
    await identity.create_account("tenant@example.com", "secret123")
    assert controller.state == ViewState.EDITING_APPLICATION
```

Notes:
------
- Uses pytest-asyncio in auto mode (see pyproject.toml)
"""

import sys
from pathlib import Path

import pytest

# Add the project root directory to Python path (using pathlib)
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from models.user_models import AuthUser
from orchestrator.bootstrap import build_controller
from providers.local_identity import LocalIdentityProvider
from providers.local_objects import LocalObjectStore
from providers.memory_documents import InMemoryDocumentStore
from storage.attachment_pipeline import AttachmentPipeline
from storage.logs_manager import LogsManager
from storage.record_store import ApplicationRecordStore

LANDLORD_EMAIL = "landlord@nearyone.com"
FILES_BASE_URL = "https://files.example.com"

@pytest.fixture
def test_settings(tmp_path):
    """Provide portal settings rooted in a temporary directory."""
    return {
        'portal': {
            'landlord_email': LANDLORD_EMAIL,
            'redirect_delay': 0.0,
            'collection': 'applications',
            'upload_prefix': 'applications',
        },
        'providers': {
            'api_key': 'test_key_123',
            'auth_domain': 'test.example.com',
            'project_id': 'test-project',
            'storage_bucket': 'test-bucket',
            'object_store_dir': str(tmp_path / 'uploads'),
            'public_base_url': FILES_BASE_URL,
        },
        'logging': {
            'level': 'DEBUG',
            'console_output': False,
        },
        'system': {
            'data_dir': str(tmp_path / 'data'),
            'log_level': 'DEBUG',
            'debug_mode': True,
        }
    }

@pytest.fixture
def logs_manager(test_settings):
    return LogsManager(test_settings)

@pytest.fixture
def identity():
    return LocalIdentityProvider(federated_email="federated.tenant@example.com")

@pytest.fixture
def documents():
    return InMemoryDocumentStore()

@pytest.fixture
def objects(test_settings):
    return LocalObjectStore(
        test_settings['providers']['object_store_dir'],
        public_base_url=FILES_BASE_URL
    )

@pytest.fixture
def record_store(documents, logs_manager):
    return ApplicationRecordStore(documents, collection='applications', logs_manager=logs_manager)

@pytest.fixture
def pipeline(objects, logs_manager):
    return AttachmentPipeline(objects, prefix='applications', logs_manager=logs_manager)

@pytest.fixture
def tenant_user():
    return AuthUser(uid="tenant-uid-1", email="jane.doe@example.com")

@pytest.fixture
def jane_fields():
    """Every required field of an application by Jane Doe."""
    return {
        'dateOfApplication': '2024-05-01',
        'desiredMoveInDate': '2024-06-01',
        'applyingFor': '12 Elm Street, Unit 3',
        'email': 'jane.doe@example.com',
        'phone': '555-0100',
        'applicantFullName': 'Jane Doe',
        'applicantDob': '1990-02-14',
        'applicantSsn': '123-45-6789',
        'presentAddress': '1 Main Street',
        'presentCity': 'Springfield',
        'presentState': 'IL',
        'presentZip': '62701',
        'presentLandlordName': 'Bob Smith',
        'presentLandlordPhone': '555-0199',
        'presentMonthlyRent': '1200',
        'presentReasonForLeaving': 'Relocating',
        'companyName': 'Acme Corp',
        'companyAddress': '99 Industry Way',
        'companyPhone': '555-0150',
        'timeAtCompany': '3 years',
        'jobRole': 'Engineer',
        'weeklyIncome': '1500',
    }

@pytest.fixture
async def controller(test_settings, logs_manager, identity, documents, objects):
    """A started Controller wired to the local providers."""
    ctrl = build_controller(
        test_settings,
        logs_manager=logs_manager,
        identity=identity,
        documents=documents,
        objects=objects
    )
    await ctrl.start()
    yield ctrl
    await ctrl.task_manager.wait_for_background()
    await ctrl.stop()
