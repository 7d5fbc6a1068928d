"""API routes for health and document saving."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from .. import __version__
from ..exceptions import DocumentReadError, InvalidPathError
from ..middleware import request_path
from ..server import MarkdownServer


router = APIRouter(prefix="/api")


# === Request/Response Models ===

class SaveDocumentRequest(BaseModel):
    """Body of a document save request."""

    raw_content: str
    meta: Optional[dict] = None


class DocumentResponse(BaseModel):
    title: str
    meta: Optional[dict] = None
    raw_content: Optional[str] = None
    parsed_content: str
    checksum: Optional[str] = None
    size: Optional[int] = None
    created: Optional[str] = None
    modified: Optional[str] = None


# === Health Check ===

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "version": __version__}


# === Documents ===

@router.put("/documents/{url_path:path}", response_model=DocumentResponse)
def save_document(url_path: str, body: SaveDocumentRequest, request: Request):
    """
    Create or overwrite the document addressed by url_path.

    "/api/documents/guides/setup" saves the document served at "/guides/setup";
    a trailing slash saves the folder's default page. The document path is
    taken from the request as sent, so percent escapes are decoded only once.
    """
    server: MarkdownServer = request.app.state.markdown_server

    if not body.raw_content.strip():
        raise HTTPException(status_code=400, detail="raw_content must not be empty")

    try:
        document = server.save(_document_url_path(request), body.raw_content, body.meta)
    except InvalidPathError:
        raise HTTPException(status_code=400, detail="Invalid document path")
    except DocumentReadError:
        raise HTTPException(status_code=500, detail="Document could not be read back")

    return DocumentResponse(**document.to_dict(include_html=True))


def _document_url_path(request: Request) -> str:
    # "/api/documents/<path>" -> "/<path>"
    parts = request_path(request).split("/", 3)
    return "/" + (parts[3] if len(parts) > 3 else "")
