"""Schema management for relational database providers."""

from protean.domain import Domain
from sqlalchemy import create_engine

RDBMS_PROVIDERS = ("sqlite", "postgresql")


def _register_models(domain: Domain, provider_name: str) -> None:
    # Touching ``_dao`` makes Protean build and register the SQLAlchemy model
    for registry in (domain.registry.aggregates, domain.registry.entities, domain.registry.projections):
        for _, record in registry.items():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> None:
    """Create tables for every element stored in a relational provider."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in RDBMS_PROVIDERS:
                _register_models(domain, provider.name)
                provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in RDBMS_PROVIDERS:
                provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
