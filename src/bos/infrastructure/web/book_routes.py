"""HTTP routes for the catalog: books and authors."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from returns.pipeline import is_successful

from bos.application.book_patch import parse_patch
from bos.application.catalog import (
    AddAuthorHandler,
    AddBookHandler,
    ListBooksHandler,
    PatchBookHandler,
    ShowBookHandler,
    UpdateBookPriceHandler,
)
from bos.domain.outcome import handle
from bos.infrastructure.bootstrap import Container
from bos.infrastructure.web.responses import error_response, get_container, to_json
from bos.infrastructure.web.schemas import (
    CreateAuthorPayload,
    CreateBookPayload,
    UpdatePricePayload,
)

book_router = APIRouter(prefix="/books", tags=["books"])
author_router = APIRouter(prefix="/authors", tags=["authors"])


def _not_found(book_id: int) -> JSONResponse:
    return error_response(404, f"Can not find a book with id: {book_id}")


def _show(container: Container, book_id: int, status_code: int = 200) -> JSONResponse:
    book = ShowBookHandler(container.unit_of_work()).handle(book_id)
    if book is None:
        return _not_found(book_id)
    headers = {"Location": f"/books/{book_id}"} if status_code == 201 else None
    return JSONResponse(status_code=status_code, content=to_json(book), headers=headers)


@book_router.get("")
def get_all_books(container: Container = Depends(get_container)):
    return [to_json(book) for book in ListBooksHandler(container.unit_of_work()).handle()]


@book_router.get("/{book_id}")
def get_book_by_id(book_id: int, container: Container = Depends(get_container)):
    return _show(container, book_id)


@book_router.post("", status_code=201)
def create_book(payload: CreateBookPayload, container: Container = Depends(get_container)):
    outcome = AddBookHandler(container.unit_of_work()).handle(
        title=payload.title,
        year=payload.year,
        price=str(payload.price),
        available=payload.available,
        author_ids=payload.authors,
    )
    return handle(
        outcome,
        lambda book_id: _show(container, book_id, status_code=201),
        lambda message: error_response(400, message),
    )


@book_router.put("/{book_id}/price")
def update_book_price(
    book_id: int,
    payload: UpdatePricePayload,
    container: Container = Depends(get_container),
):
    if ShowBookHandler(container.unit_of_work()).handle(book_id) is None:
        return _not_found(book_id)
    outcome = UpdateBookPriceHandler(container.unit_of_work()).handle(book_id, str(payload.price))
    return handle(
        outcome,
        lambda _: _show(container, book_id),
        lambda message: error_response(400, message),
    )


@book_router.patch("/{book_id}")
def patch_book(
    book_id: int,
    fields: dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
):
    if ShowBookHandler(container.unit_of_work()).handle(book_id) is None:
        return _not_found(book_id)

    commands = parse_patch(fields)
    if not is_successful(commands):
        return error_response(400, commands.failure())

    outcome = PatchBookHandler(container.unit_of_work()).handle(book_id, commands.unwrap())
    return handle(
        outcome,
        lambda _: _show(container, book_id),
        lambda message: error_response(400, message),
    )


@author_router.post("", status_code=201)
def create_author(payload: CreateAuthorPayload, container: Container = Depends(get_container)):
    outcome = AddAuthorHandler(container.unit_of_work()).handle(
        payload.first_name, payload.last_name
    )
    return handle(
        outcome,
        lambda author_id: JSONResponse(
            status_code=201,
            content={
                "id": author_id,
                "first_name": payload.first_name.strip(),
                "last_name": payload.last_name.strip(),
            },
            headers={"Location": f"/authors/{author_id}"},
        ),
        lambda message: error_response(400, message),
    )
