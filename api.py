import os
from datetime import date
from typing import Any, Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from langgraph.checkpoint.memory import InMemorySaver
from pydantic import BaseModel

from travelnow.graph import answer, checkout_serializer, create_checkout_graph, run_checkout
from travelnow.nodes.payment import card_digits
from travelnow.states import CheckoutState, Contact, User
from travelnow.tools import ApiClient, ApiError, Backend
from travelnow.utils import MemoryTokenStore, PricingError, compute_pricing, count_nights

load_dotenv()

API_URL = os.getenv("TRAVELNOW_API_URL", "http://localhost:5000")
TIMEOUT = float(os.getenv("TRAVELNOW_TIMEOUT", "30"))

app = FastAPI(title="TravelNow Checkout API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

checkout_memory = InMemorySaver(serde=checkout_serializer())


class QuoteRequest(BaseModel):
    nightly_rate: Optional[float] = None
    nights: Optional[int] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    voucher_percent: Optional[float] = None


class StartCheckoutRequest(BaseModel):
    session_id: str
    hotel_id: str
    check_in: date
    check_out: date
    room_type_id: Optional[str] = None
    adults: int = 2
    children: int = 0
    rooms: int = 1
    voucher_id: Optional[str] = None
    contact: Optional[Contact] = None
    special_request: str = ""


class AnswerRequest(BaseModel):
    session_id: str
    field: str
    value: Any = None


def backend_for(authorization: Optional[str]) -> Backend:
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip() or None
    client = ApiClient(API_URL, token_store=MemoryTokenStore(token), timeout=TIMEOUT)
    return Backend(client)


def serialize_checkout(state: CheckoutState) -> dict:
    data = state.model_dump(mode="json", exclude={"card"})
    data["card_last4"] = card_digits(state.card.number)[-4:] or None
    return data


def api_error(e: ApiError) -> HTTPException:
    return HTTPException(status_code=e.status or 502, detail=e.message)


def current_user(backend: Backend) -> User:
    """The caller behind the forwarded bearer token. Checkout sessions belong to them."""
    if not backend.client.token:
        raise HTTPException(status_code=401, detail="Please log in to book")
    try:
        user = backend.auth.me()
    except ApiError as e:
        raise api_error(e)
    if not user.id:
        raise HTTPException(status_code=401, detail="Could not identify the logged-in user")
    return user


def checkout_thread(user: User, session_id: str) -> str:
    return f"{user.id}:{session_id}"


def load_checkout(graph, thread_id: str) -> CheckoutState:
    snapshot = graph.get_state({"configurable": {"thread_id": thread_id}})
    if not snapshot.values:
        raise HTTPException(status_code=404, detail="Checkout session not found")
    return CheckoutState.model_validate(snapshot.values)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.post("/quote")
def quote(request: QuoteRequest):
    try:
        nights = request.nights
        if nights is None:
            if not request.check_in or not request.check_out:
                raise PricingError("Provide nights or both check_in and check_out")
            nights = count_nights(request.check_in, request.check_out)
        pricing = compute_pricing(request.nightly_rate, nights, request.voucher_percent)
    except PricingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return pricing.model_dump()


@app.post("/checkout/start")
def start_checkout(request: StartCheckoutRequest, authorization: Optional[str] = Header(None)):
    backend = backend_for(authorization)
    user = current_user(backend)

    voucher = None
    if request.voucher_id:
        try:
            claimed = {v.id: v for v in backend.vouchers.claimed()}
        except ApiError as e:
            raise api_error(e)
        voucher = claimed.get(request.voucher_id)
        if voucher is None:
            raise HTTPException(
                status_code=400, detail="Voucher not found among your claimed vouchers"
            )

    contact = request.contact or Contact(
        full_name=user.full_name, email=user.email, phone=user.phone
    )
    state = CheckoutState(
        hotel_id=request.hotel_id,
        room_type_id=request.room_type_id,
        check_in=request.check_in,
        check_out=request.check_out,
        adults=request.adults,
        children=request.children,
        rooms=request.rooms,
        voucher=voucher,
        contact=contact,
        special_request=request.special_request,
    )

    graph = create_checkout_graph(backend, checkpointer=checkout_memory)
    state = run_checkout(graph, state, checkout_thread(user, request.session_id))
    return {"status": "success", "state": serialize_checkout(state)}


@app.post("/checkout/answer")
def answer_checkout(request: AnswerRequest, authorization: Optional[str] = Header(None)):
    backend = backend_for(authorization)
    thread_id = checkout_thread(current_user(backend), request.session_id)
    graph = create_checkout_graph(backend, checkpointer=checkout_memory)

    try:
        state = answer(load_checkout(graph, thread_id), request.field, request.value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    state = run_checkout(graph, state, thread_id)
    return {"status": "success", "state": serialize_checkout(state)}


@app.get("/checkout/{session_id}")
def get_checkout(session_id: str, authorization: Optional[str] = Header(None)):
    backend = backend_for(authorization)
    thread_id = checkout_thread(current_user(backend), session_id)
    graph = create_checkout_graph(backend, checkpointer=checkout_memory)
    return {"status": "success", "state": serialize_checkout(load_checkout(graph, thread_id))}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
