"""MentorConnect.

Backend for a mentorship marketplace where mentors and mentees register, build
profiles, discover each other, schedule bookings, chat, receive real-time
notifications and signal audio/video calls.

Subpackages
-----------

- ``mentorconnect.core``:

  - Logging and monitoring configuration.
  - The database layer: SQLModel entities, async repositories and session
    management.
  - I/O models shared by the API.

- ``mentorconnect.integrations``:

  - Thin HTTP clients for the third-party services the marketplace delegates
    to (Pusher for real-time relay, Resend for email, reCAPTCHA).

- ``mentorconnect.server``:

  - The FastAPI application, its routers, dependencies and services.
"""
