#!/usr/bin/env python3
"""Mock Guidely auth + listings API for local development.

In-memory only. Passwords are bcrypt-hashed, bearer tokens are HS256 JWTs.
Point the client at it with GUIDELY_API_URL=http://localhost:14000.
"""

import sys
import time
import uuid
from datetime import datetime, timezone

import bcrypt
import jwt
from flask import Flask, jsonify, request

app = Flask(__name__)

SECRET = "mock-guidely-signing-secret-for-local-dev-only"
TOKEN_TTL_SECONDS = 7 * 24 * 3600
ROLES = ("TOURIST", "GUIDE", "ADMIN")

_users = {}  # email -> record (includes password_hash)
_listings = {}  # id -> listing


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _public(user: dict) -> dict:
    return {k: v for k, v in user.items() if k != "password_hash"}


def _issue(user: dict) -> str:
    now = int(time.time())
    return jwt.encode({"sub": user["id"], "role": user["role"], "iat": now, "exp": now + TOKEN_TTL_SECONDS}, SECRET, "HS256")


def _create_user(name: str, email: str, password: str, role: str) -> dict:
    user = {
        "id": uuid.uuid4().hex[:12],
        "name": name,
        "email": email,
        "role": role,
        "languages": [],
        "createdAt": _now_iso(),
        "updatedAt": _now_iso(),
        "password_hash": bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8"),
    }
    _users[email] = user
    if role == "GUIDE":
        _seed_listings(user)
    return user


def _seed_listings(guide: dict) -> None:
    samples = [
        ("Old Town Walking Tour", "Lisbon", "History", 45, 4.8, True),
        ("Tapas and Wine Evening", "Lisbon", "Food & Drink", 85, 4.6, False),
        ("Sintra Day Trip", "Sintra", "Nature", 120, 4.9, True),
    ]
    for title, city, category, fee, rating, featured in samples:
        listing_id = uuid.uuid4().hex[:12]
        _listings[listing_id] = {
            "id": listing_id,
            "guideId": guide["id"],
            "title": title,
            "description": f"{title} with {guide['name']}.",
            "city": city,
            "category": category,
            "tourFee": fee,
            "avgRating": rating,
            "featured": featured,
            "isActive": True,
            "createdAt": _now_iso(),
        }


def _bearer_claims():
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    try:
        return jwt.decode(auth[len("Bearer ") :], SECRET, algorithms=["HS256"])
    except jwt.PyJWTError:
        return None


@app.route("/api/auth/login", methods=["POST"])
def login():
    body = request.get_json(silent=True) or {}
    user = _users.get(str(body.get("email") or "").lower())
    password = str(body.get("password") or "")
    if user is None or not bcrypt.checkpw(password.encode("utf-8"), user["password_hash"].encode("utf-8")):
        return jsonify({"success": False, "message": "Invalid email or password"}), 401
    return jsonify({"success": True, "data": {"user": _public(user), "token": _issue(user)}})


@app.route("/api/auth/register", methods=["POST"])
def register():
    body = request.get_json(silent=True) or {}
    name = str(body.get("name") or "").strip()
    email = str(body.get("email") or "").strip().lower()
    password = str(body.get("password") or "")
    role = str(body.get("role") or "TOURIST").upper()
    if not name or not email or not password:
        return jsonify({"success": False, "message": "Name, email, and password are required"}), 400
    if role not in ROLES:
        return jsonify({"success": False, "message": "Invalid role"}), 400
    if email in _users:
        return jsonify({"success": False, "message": "Email already exists"}), 400
    user = _create_user(name, email, password, role)
    return jsonify({"success": True, "data": {"user": _public(user), "token": _issue(user)}}), 201


@app.route("/api/auth/google", methods=["POST"])
def google():
    body = request.get_json(silent=True) or {}
    id_token = str(body.get("id_token") or "")
    try:
        # Mock: trust the token contents. The real backend verifies it with Google.
        claims = jwt.decode(id_token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return jsonify({"success": False, "message": "Invalid Google token"}), 401
    email = str(claims.get("email") or "").lower()
    if not email:
        return jsonify({"success": False, "message": "Google account has no email"}), 401
    user = _users.get(email) or _create_user(str(claims.get("name") or email), email, uuid.uuid4().hex, "TOURIST")
    return jsonify({"success": True, "data": {"user": _public(user), "token": _issue(user)}})


@app.route("/api/listings", methods=["GET"])
def listings():
    return jsonify({"success": True, "data": list(_listings.values())})


@app.route("/api/guides", methods=["GET"])
def guides():
    return jsonify({"success": True, "data": [_public(u) for u in _users.values() if u["role"] == "GUIDE"]})


@app.route("/api/listings/guide/<guide_id>", methods=["GET"])
def guide_listings(guide_id):
    if _bearer_claims() is None:
        return jsonify({"success": False, "message": "Unauthorized"}), 401
    return jsonify({"success": True, "data": [x for x in _listings.values() if x["guideId"] == guide_id]})


@app.route("/api/bookings/<user_id>", methods=["GET"])
def bookings(user_id):
    if _bearer_claims() is None:
        return jsonify({"success": False, "message": "Unauthorized"}), 401
    return jsonify({"success": True, "data": []})


@app.route("/api/listings/<listing_id>/toggle", methods=["PATCH"])
def toggle_listing(listing_id):
    claims = _bearer_claims()
    if claims is None:
        return jsonify({"success": False, "message": "Unauthorized"}), 401
    listing = _listings.get(listing_id)
    if listing is None:
        return jsonify({"success": False, "message": "Listing not found"}), 404
    if listing["guideId"] != claims.get("sub"):
        return jsonify({"success": False, "message": "Forbidden"}), 403
    listing["isActive"] = not listing["isActive"]
    return jsonify({"success": True, "data": listing})


@app.route("/healthz")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    print("Mock Guidely API starting on http://0.0.0.0:14000", file=sys.stderr)
    app.run(host="0.0.0.0", port=14000, debug=False)
