"""
Proof Routes

Serve inclusion proofs and the current root.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_store
from api.models.responses import ProofResponse, RootResponse
from core.crypto.hashing import to_hex
from core.store import BlobStore


router = APIRouter(tags=["proofs"])


@router.get("/proof/{index}", response_model=ProofResponse)
async def get_proof(index: int, store: BlobStore = Depends(get_store)) -> ProofResponse:
    """
    Inclusion proof for the file at index.

    `proof` and `directions` are index-aligned and ordered leaf level
    first; replay them in the order given.
    """
    proof, root = store.get_proof_and_root(index)
    payload = proof.to_dict()
    return ProofResponse(
        index=payload["index"],
        proof=payload["proof"],
        directions=payload["directions"],
        root=to_hex(root),
    )


@router.get("/root", response_model=RootResponse)
async def get_root(store: BlobStore = Depends(get_store)) -> RootResponse:
    """Current root digest and file count, read together."""
    snapshot = store.snapshot()
    return RootResponse(root=to_hex(snapshot.root), file_count=snapshot.count)
