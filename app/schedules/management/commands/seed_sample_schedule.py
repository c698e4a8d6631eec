import re

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from authentication.models import Department
from schedules.constants import SCHEDULE_CONFIG
from schedules.models import Course, Schedule
from schedules.sample_data import SAMPLE_SCHEDULE, parse_time_range


class Command(BaseCommand):
    help = "Load the sample weekly timetable into Course and Schedule rows"

    def add_arguments(self, parser):
        parser.add_argument("--semester", type=int, default=5)
        parser.add_argument("--section", default="1")
        parser.add_argument("--academic-year", default=SCHEDULE_CONFIG.DEFAULT_ACADEMIC_YEAR)

    def handle(self, *args, **options):
        semester = options["semester"]
        section = options["section"]
        if not 1 <= semester <= 12:
            raise CommandError("semester must be between 1 and 12")

        created_slots = 0
        with transaction.atomic():
            for day_name, slots in SAMPLE_SCHEDULE.items():
                day_of_week = SCHEDULE_CONFIG.DAY_NAMES.index(day_name)
                for slot in slots:
                    course = self._course(slot)
                    start_time, end_time = parse_time_range(slot["time"])
                    _, created = Schedule.objects.get_or_create(
                        course=course,
                        semester=semester,
                        section=section,
                        day_of_week=day_of_week,
                        start_time=start_time,
                        defaults={
                            "end_time": end_time,
                            "room": slot["room"],
                            "academic_year": options["academic_year"],
                        },
                    )
                    created_slots += created

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {created_slots} class slots for semester {semester} section {section}"
            )
        )

    def _course(self, slot) -> Course:
        prefix = re.match(r"[A-Z]+", slot["course_code"]).group(0)
        course, _ = Course.objects.get_or_create(
            code=slot["course_code"],
            defaults={
                "title": slot["title"],
                "department": Department.objects.filter(code=prefix).first(),
            },
        )
        return course
