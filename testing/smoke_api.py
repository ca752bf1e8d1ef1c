"""
Quick API smoke test against a running server and a real database.
Walks through: health, register, login, profile, events, register-event, user-events.

Usage:
    python testing/smoke_api.py [BASE_URL]
"""

import sys
import uuid

import requests

BASE = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000/api"
suffix = uuid.uuid4().hex[:8]

# 1) API and database are up
r = requests.get(f"{BASE}/test")
print("TEST:", r.status_code, r.json())
r = requests.get(f"{BASE}/health")
print("HEALTH:", r.status_code, r.json())

# 2) Register a user
username = f"smoke_{suffix}"
r = requests.post(f"{BASE}/users", json={
    "username": username,
    "email": f"{username}@example.com",
    "password": "pass1234"
})
print("REGISTER:", r.status_code, r.json())
user = r.json()

# 3) Login with same credentials, then with a wrong password
r = requests.post(f"{BASE}/login", json={"username": username, "password": "pass1234"})
print("LOGIN:", r.status_code, r.json())
r = requests.post(f"{BASE}/login", json={"username": username, "password": "nope"})
print("LOGIN (wrong password):", r.status_code, r.json())

# 4) Profile
r = requests.get(f"{BASE}/users/{user.get('userId')}")
print("PROFILE:", r.status_code, r.json())

# 5) List events and show the first one
r = requests.get(f"{BASE}/events")
events = r.json()
print("EVENTS:", r.status_code, len(events), "event(s)")

if events:
    event = events[0]
    r = requests.get(f"{BASE}/events/{event['eventId']}")
    print("EVENT:", r.status_code, r.json())

    # 6) Register twice: the second attempt must be rejected
    registration = {
        "userId": user.get("userId"),
        "eventId": event["eventId"],
        "username": username,
        "email": user.get("email"),
        "eventTitle": event["eventName"],
    }
    r = requests.post(f"{BASE}/register-event", json=registration)
    print("REGISTER EVENT:", r.status_code, r.json())
    r = requests.post(f"{BASE}/register-event", json=registration)
    print("REGISTER EVENT (again):", r.status_code, r.json())

# 7) Registrations for the user
r = requests.get(f"{BASE}/user-events/{user.get('userId')}")
print("USER EVENTS:", r.status_code, r.json())
