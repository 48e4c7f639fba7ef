"""
Routers module - API endpoint handlers organized by feature.

- auth: Account signup and login
- users: Profile read/update and password change
- google_auth: Google OAuth connect/callback/disconnect/status
- google_calendar: Interview event creation
- schedules: Appointment listing
"""
