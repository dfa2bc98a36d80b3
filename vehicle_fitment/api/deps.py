"""FastAPI dependency injection."""

from vehicle_fitment.services.signature_parser import SignatureParser, get_default_parser


def get_parser() -> SignatureParser:
    """Dependency for the shared signature parser."""
    return get_default_parser()
