"""
Schedules app.

Courses, weekly class slots and the slots each user is enrolled in, plus
the static sample timetable shown before a user has enrolled anywhere.
"""
