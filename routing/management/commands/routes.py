"""
Management command: routes

Print the project route table, one line per route:

    python manage.py routes
    python manage.py routes --name post

Columns are name, verb, pattern and the action the route dispatches to.
Unnamed routes (create/update/destroy) show a blank name.
"""

from django.core.management.base import BaseCommand

import routing


class Command(BaseCommand):
    help = 'List every registered route with its name, verb, pattern and action.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--name',
            type=str,
            default=None,
            metavar='TEXT',
            help='Only show routes whose name contains TEXT.',
        )

    def handle(self, *args, **options):
        name_filter = options['name']
        rows = [
            (route.name or '', route.verb, route.pattern, route.action)
            for route in routing.get_router()
            if not name_filter or (route.name and name_filter in route.name)
        ]
        if not rows:
            self.stdout.write(self.style.WARNING('No routes match.'))
            return

        widths = [max(len(row[i]) for row in rows) for i in range(3)]
        for name, verb, pattern, action in rows:
            self.stdout.write(
                f'{name:>{widths[0]}} {verb:<{widths[1]}} {pattern:<{widths[2]}} {action}'
            )
