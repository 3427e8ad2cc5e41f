from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass


class EventType(enum.Enum):
    """User-facing event types emitted by the IAM server.

    The metric label is the member NAME, so keep names stable.
    """

    LOGIN = "LOGIN"
    LOGIN_ERROR = "LOGIN_ERROR"
    REGISTER = "REGISTER"
    REGISTER_ERROR = "REGISTER_ERROR"
    LOGOUT = "LOGOUT"
    LOGOUT_ERROR = "LOGOUT_ERROR"
    CODE_TO_TOKEN = "CODE_TO_TOKEN"
    CODE_TO_TOKEN_ERROR = "CODE_TO_TOKEN_ERROR"
    CLIENT_LOGIN = "CLIENT_LOGIN"
    CLIENT_LOGIN_ERROR = "CLIENT_LOGIN_ERROR"
    REFRESH_TOKEN = "REFRESH_TOKEN"
    REFRESH_TOKEN_ERROR = "REFRESH_TOKEN_ERROR"
    INTROSPECT_TOKEN = "INTROSPECT_TOKEN"
    TOKEN_EXCHANGE = "TOKEN_EXCHANGE"
    UPDATE_EMAIL = "UPDATE_EMAIL"
    UPDATE_PROFILE = "UPDATE_PROFILE"
    UPDATE_PASSWORD = "UPDATE_PASSWORD"
    UPDATE_TOTP = "UPDATE_TOTP"
    REMOVE_TOTP = "REMOVE_TOTP"
    VERIFY_EMAIL = "VERIFY_EMAIL"
    SEND_VERIFY_EMAIL = "SEND_VERIFY_EMAIL"
    SEND_RESET_PASSWORD = "SEND_RESET_PASSWORD"
    RESET_PASSWORD = "RESET_PASSWORD"
    RESET_PASSWORD_ERROR = "RESET_PASSWORD_ERROR"
    GRANT_CONSENT = "GRANT_CONSENT"
    UPDATE_CONSENT = "UPDATE_CONSENT"
    REVOKE_GRANT = "REVOKE_GRANT"
    IDENTITY_PROVIDER_LOGIN = "IDENTITY_PROVIDER_LOGIN"
    IDENTITY_PROVIDER_FIRST_LOGIN = "IDENTITY_PROVIDER_FIRST_LOGIN"
    IDENTITY_PROVIDER_LINK_ACCOUNT = "IDENTITY_PROVIDER_LINK_ACCOUNT"
    FEDERATED_IDENTITY_LINK = "FEDERATED_IDENTITY_LINK"
    REMOVE_FEDERATED_IDENTITY = "REMOVE_FEDERATED_IDENTITY"
    IMPERSONATE = "IMPERSONATE"
    CUSTOM_REQUIRED_ACTION = "CUSTOM_REQUIRED_ACTION"


class OperationType(enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ACTION = "ACTION"


class ResourceType(enum.Enum):
    REALM = "REALM"
    REALM_ROLE = "REALM_ROLE"
    REALM_ROLE_MAPPING = "REALM_ROLE_MAPPING"
    REALM_SCOPE_MAPPING = "REALM_SCOPE_MAPPING"
    USER = "USER"
    USER_SESSION = "USER_SESSION"
    USER_FEDERATION_PROVIDER = "USER_FEDERATION_PROVIDER"
    GROUP = "GROUP"
    GROUP_MEMBERSHIP = "GROUP_MEMBERSHIP"
    CLIENT = "CLIENT"
    CLIENT_ROLE = "CLIENT_ROLE"
    CLIENT_ROLE_MAPPING = "CLIENT_ROLE_MAPPING"
    CLIENT_SCOPE = "CLIENT_SCOPE"
    CLIENT_SCOPE_MAPPING = "CLIENT_SCOPE_MAPPING"
    IDENTITY_PROVIDER = "IDENTITY_PROVIDER"
    IDENTITY_PROVIDER_MAPPER = "IDENTITY_PROVIDER_MAPPER"
    PROTOCOL_MAPPER = "PROTOCOL_MAPPER"
    AUTH_FLOW = "AUTH_FLOW"
    AUTH_EXECUTION = "AUTH_EXECUTION"
    AUTHENTICATOR_CONFIG = "AUTHENTICATOR_CONFIG"
    REQUIRED_ACTION = "REQUIRED_ACTION"
    COMPONENT = "COMPONENT"
    AUTHORIZATION_RESOURCE_SERVER = "AUTHORIZATION_RESOURCE_SERVER"
    AUTHORIZATION_RESOURCE = "AUTHORIZATION_RESOURCE"
    AUTHORIZATION_SCOPE = "AUTHORIZATION_SCOPE"
    AUTHORIZATION_POLICY = "AUTHORIZATION_POLICY"


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """A user event as delivered by the host's event source.

    details is None when the source sent no detail map at all, which is
    different from an empty map.  Both resolve the same way for metrics.
    """

    type: EventType
    realm_id: str
    client_id: str | None = None
    error: str | None = None
    details: Mapping[str, str | None] | None = None


@dataclass(frozen=True, slots=True)
class AdminDomainEvent:
    operation_type: OperationType
    resource_type: ResourceType
    realm_id: str
