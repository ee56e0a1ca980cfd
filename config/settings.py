"""
Configuration Management Module

This module handles loading and managing application configuration settings,
including environment variables and default values.

Required Modules:
- os: For environment variable access
- dotenv: For loading .env files
- pathlib: For creating the data directories up front
"""

import os
from dotenv import load_dotenv
from pathlib import Path

from constants import TimingConstants, PortalDefaults

def _env_flag(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).lower() == 'true'

def _validate_env_vars(config: dict) -> list[str]:
    """Validate numeric values and return list of warnings."""
    warnings = []
    default_delay = TimingConstants.SUBMIT_REDIRECT_DELAY / 1000

    try:
        delay = float(config['portal']['redirect_delay'])
        if delay < 0:
            warnings.append("SUBMIT_REDIRECT_DELAY is negative. Using 0.")
            delay = 0.0
        config['portal']['redirect_delay'] = delay
    except ValueError:
        warnings.append(f"Invalid SUBMIT_REDIRECT_DELAY value. Using default: {default_delay}")
        config['portal']['redirect_delay'] = default_delay

    if '@' not in config['portal']['landlord_email']:
        warnings.append(
            f"LANDLORD_EMAIL does not look like an email address. Using default: {PortalDefaults.LANDLORD_EMAIL}"
        )
        config['portal']['landlord_email'] = PortalDefaults.LANDLORD_EMAIL

    return warnings

def _setup_data_directories(config: dict) -> list[str]:
    """Setup required data directories and return any warnings."""
    warnings = []
    required_dirs = [
        Path(config['system']['data_dir']),
        Path(config['system']['data_dir']) / 'logs',
        Path(config['providers']['object_store_dir']),
    ]

    for path in required_dirs:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            warnings.append(f"Failed to create directory '{path}': {e}")

    return warnings

def load_settings() -> dict:
    """
    Load and validate all configuration settings.

    Provider credentials are supplied through environment-style configuration
    (a .env file or the process environment). The landlord address drives role
    classification and can be overridden per deployment with LANDLORD_EMAIL.
    """
    load_dotenv()  # Load variables from .env

    base_data_dir = os.getenv('DATA_DIR', './data')
    log_level = os.getenv('LOG_LEVEL', 'INFO').upper()

    config = {
        'portal': {
            'landlord_email': os.getenv('LANDLORD_EMAIL', PortalDefaults.LANDLORD_EMAIL).strip(),
            'redirect_delay': os.getenv(
                'SUBMIT_REDIRECT_DELAY',
                str(TimingConstants.SUBMIT_REDIRECT_DELAY / 1000)
            ),
            'collection': os.getenv('APPLICATIONS_COLLECTION', PortalDefaults.APPLICATIONS_COLLECTION),
            'upload_prefix': os.getenv('UPLOAD_PREFIX', PortalDefaults.UPLOAD_PREFIX).strip('/'),
        },
        'providers': {
            'api_key': os.getenv('PROVIDER_API_KEY', ''),
            'auth_domain': os.getenv('PROVIDER_AUTH_DOMAIN', ''),
            'project_id': os.getenv('PROVIDER_PROJECT_ID', ''),
            'storage_bucket': os.getenv('PROVIDER_STORAGE_BUCKET', ''),
            'object_store_dir': os.getenv(
                'OBJECT_STORE_DIR',
                str(Path(base_data_dir) / PortalDefaults.OBJECT_STORE_DIR)
            ),
            'public_base_url': os.getenv('PUBLIC_BASE_URL', '').rstrip('/'),
        },
        'logging': {
            'level': log_level,
            'console_output': _env_flag('LOG_CONSOLE_OUTPUT', 'True'),
        },
        'system': {
            'data_dir': base_data_dir,
            'log_level': log_level,
            'debug_mode': _env_flag('DEBUG_MODE'),
        }
    }

    warnings = []
    warnings.extend(_validate_env_vars(config))
    warnings.extend(_setup_data_directories(config))

    for warning in warnings:
        print(f"[Settings] WARNING: {warning}")

    return config
