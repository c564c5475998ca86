"""
storefront/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and lazily initializes the Firebase Admin SDK (Firestore DB) using the provided credentials.
Routers receive the Firestore client through the `get_db` dependency.
"""
from functools import lru_cache
from typing import Literal, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    firebase_cred_file: str = Field('firebase_service_account.json', alias='FIREBASE_CRED_FILE')
    firebase_project_id: Optional[str] = Field(None, alias='FIREBASE_PROJECT_ID')

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = Field(None, alias='FIREBASE_PRIVATE_KEY_ID')
    firebase_private_key: Optional[str] = Field(None, alias='FIREBASE_PRIVATE_KEY')
    firebase_client_email: Optional[str] = Field(None, alias='FIREBASE_CLIENT_EMAIL')
    firebase_client_id: Optional[str] = Field(None, alias='FIREBASE_CLIENT_ID')
    firebase_auth_uri: Optional[str] = Field(None, alias='FIREBASE_AUTH_URI')
    firebase_token_uri: Optional[str] = Field(None, alias='FIREBASE_TOKEN_URI')
    firebase_auth_provider_x509_cert_url: Optional[str] = Field(None, alias='FIREBASE_AUTH_PROVIDER_X509_CERT_URL')
    firebase_client_x509_cert_url: Optional[str] = Field(None, alias='FIREBASE_CLIENT_X509_CERT_URL')

    # Prepended to every collection name (e.g. "staging_")
    collection_prefix: str = Field('', alias='FIREBASE_COLLECTION_PREFIX')

    debug: bool = Field(False, alias='DEBUG')
    log_level: str = Field('INFO', alias='LOG_LEVEL')
    allowed_origins: str = Field('*', alias='ALLOWED_ORIGINS')  # Comma-separated list or '*' for all

    # "catalog": recompute order totals from listing prices; "client": trust the request body
    order_total_source: Literal["catalog", "client"] = Field("catalog", alias='ORDER_TOTAL_SOURCE')
    # Accept "mock_jwt_token_<uid>" bearer tokens (development only)
    allow_mock_tokens: bool = Field(False, alias='ALLOW_MOCK_TOKENS')


# Load settings from environment (.env file, etc.)
settings = Settings()


def collection_name(name: str) -> str:
    return f"{settings.collection_prefix}{name}" if settings.collection_prefix else name


def _credentials() -> credentials.Base:
    # Check if we have environment variables for Firebase credentials (Cloud Run)
    if all([
        settings.firebase_private_key_id,
        settings.firebase_private_key,
        settings.firebase_client_email,
        settings.firebase_client_id,
        settings.firebase_auth_uri,
        settings.firebase_token_uri,
        settings.firebase_auth_provider_x509_cert_url,
        settings.firebase_client_x509_cert_url
    ]):
        cred_dict = {
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "private_key_id": settings.firebase_private_key_id,
            "private_key": settings.firebase_private_key.replace("\\n", "\n"),
            "client_email": settings.firebase_client_email,
            "client_id": settings.firebase_client_id,
            "auth_uri": settings.firebase_auth_uri,
            "token_uri": settings.firebase_token_uri,
            "auth_provider_x509_cert_url": settings.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": settings.firebase_client_x509_cert_url
        }
        return credentials.Certificate(cred_dict)
    # Use service account file (local development)
    return credentials.Certificate(settings.firebase_cred_file)


def init_firebase() -> firebase_admin.App:
    """Initialize the default Firebase app once; later calls return it."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    options = {'projectId': settings.firebase_project_id} if settings.firebase_project_id else None
    return firebase_admin.initialize_app(_credentials(), options)


@lru_cache
def get_db():
    """Firestore client dependency. Overridden in tests."""
    return firestore.client(init_firebase())
