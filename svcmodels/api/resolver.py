from __future__ import annotations

from svcmodels.events import DescriptorUnresolved, emit
from svcmodels.exceptions import UnresolvedDescriptorError
from .provider import ProviderFn
from .types import NOT_FOUND, Descriptor, DocumentType


def resolve(
    provider: ProviderFn,
    doc_type: str | DocumentType,
    service: str,
    version: str,
) -> Descriptor:
    """Invoke ``provider`` and turn NOT_FOUND into an error.

    The type token is checked before the provider runs, so plain function
    providers get the same validation as the built-in ones.

    Raises:
        InvalidDocumentTypeError: type is not api/paginator/waiter.
        UnresolvedDescriptorError: no source had the requested document.
    """
    type_token = DocumentType.parse(doc_type).value
    result = provider(type_token, service, version)
    if result is not NOT_FOUND:
        return result

    emit(
        DescriptorUnresolved(
            doc_type=type_token, service=service, version=version
        )
    )
    if service:
        message = (
            f"The {service} service does not have API version: {version}."
        )
    else:
        message = (
            "You must specify a valid service name to retrieve its API data."
        )
    raise UnresolvedDescriptorError(
        message, doc_type=type_token, service=service, version=version
    )
