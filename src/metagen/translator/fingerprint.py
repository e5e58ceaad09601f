"""Content fingerprints of schema entities.

A fingerprint is a short hash of the entity's canonical structural dict
(see ``SchemaSerializer.to_dict``), rendered as eight lowercase hex
digits.  Any change to any field of the entity, nested types included,
changes the fingerprint; key order in the source JSON does not.
"""
from __future__ import annotations

import hashlib
import json

from metagen.schema.nodes import Enumeration, Structure, TypeAlias
from metagen.schema.serializer import SchemaSerializer

_SERIALIZER = SchemaSerializer()


def fingerprint(entity: Structure | Enumeration | TypeAlias) -> str:
    """Return the eight-digit hex fingerprint of *entity*."""
    canonical = json.dumps(
        _SERIALIZER.to_dict(entity),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.blake2b(canonical.encode("utf-8"), digest_size=4).hexdigest()
