from django.core.management.base import BaseCommand

from staffing.services.departments import assign_missing_heads, refresh_all_doctor_counts


class Command(BaseCommand):
    help = "Recount doctors per department and fill in missing department heads."

    def add_arguments(self, parser):
        parser.add_argument(
            '--skip-heads', action='store_true',
            help='Only refresh the stored doctor counts.',
        )

    def handle(self, *args, **options):
        refreshed = refresh_all_doctor_counts()
        self.stdout.write(f"Refreshed doctor counts for {refreshed} departments")

        if options['skip_heads']:
            return

        assigned = assign_missing_heads()
        for department, head in assigned:
            self.stdout.write(f"  {department.name}: head set to {head.name}")
        self.stdout.write(self.style.SUCCESS(f"Assigned {len(assigned)} department heads"))
