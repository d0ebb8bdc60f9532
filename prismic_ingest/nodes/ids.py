import uuid


class NodeIdBuilder:
    """Derives stable node ids (UUIDv5) from a seed string.

    Called as ``builder(type, id)`` it produces the id of a document node,
    seeded with ``"{type} {id}"``.
    """

    def __init__(self, namespace: str) -> None:
        self._namespace = uuid.uuid5(uuid.NAMESPACE_URL, namespace)

    def create(self, seed: str) -> str:
        return str(uuid.uuid5(self._namespace, seed))

    def __call__(self, document_type: str, document_id: str) -> str:
        return self.create(f"{document_type} {document_id}")
