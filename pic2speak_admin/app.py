from __future__ import annotations

from getpass import getpass
import argparse
import sys

from .analytics import STATS_RANGES
from .config import load_settings
from .confirm import DELETE_PHRASE
from .console import AdminConsole, Notice
from .errors import ApiError
from .logging_utils import configure_logging
from .models import Topic


def _ask_yes_no(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in {"y", "yes"}


def _print_notice(notice: Notice | None) -> int:
    if notice is None:
        print("Cancelled.")
        return 0
    print(f"[{notice.kind}] {notice.message}")
    return 0 if notice.ok else 1


def _cmd_login(console: AdminConsole, args, settings) -> int:
    email = args.email or settings.admin_email or input("Email: ").strip()
    password = settings.admin_password or getpass("Password: ")
    return _print_notice(console.login(email, password))


def _cmd_logout(console: AdminConsole, args, settings) -> int:
    return _print_notice(console.logout())


def _cmd_whoami(console: AdminConsole, args, settings) -> int:
    print(console.session.state.value)
    return 0


def _cmd_register_request(console: AdminConsole, args, settings) -> int:
    password = getpass("Password: ")
    secret = getpass("Admin secret key: ")
    console.session.request_registration(console.gateway, args.email, password, secret)
    print("OTP sent.")
    return 0


def _cmd_categories(console: AdminConsole, args, settings) -> int:
    for c in console.categories.fetch_all():
        level = c.level.value if c.level else "-"
        print(f"{c.id}\t{c.order if c.order is not None else '-'}\t{level}\t{c.name}")
    return 0


def _cmd_topics(console: AdminConsole, args, settings) -> int:
    for t in console.topics.fetch_all(args.category_id):
        print(f"{t.id}\t{t.name}")
    return 0


def _cmd_lessons(console: AdminConsole, args, settings) -> int:
    console.lessons.fetch_all(args.level)
    lessons = console.lessons.for_topic(args.topic) if args.topic else console.lessons.items
    for lesson in lessons:
        print(f"{lesson.id}\tpart {lesson.part_number}\t{lesson.title}")
    return 0


def _cmd_lesson(console: AdminConsole, args, settings) -> int:
    lesson = console.lessons.fetch_one(args.lesson_id)
    print(f"{lesson.title} (part {lesson.part_number}, {lesson.level.value if lesson.level else '-'})")
    if lesson.description:
        print(lesson.description)
    return 0


def _cmd_sentences(console: AdminConsole, args, settings) -> int:
    for s in console.sentences.fetch_all(args.lesson_id):
        premium = " *" if s.is_premium else ""
        print(f"{s.id}\t{s.order}\t{s.text}{premium}")
    return 0


def _cmd_stats(console: AdminConsole, args, settings) -> int:
    stats = console.analytics.fetch_stats(args.range)
    print(f"users: {stats.total_users}")
    print(f"categories: {stats.total_categories}")
    print(f"topics: {stats.total_topics}")
    print(f"lessons: {stats.total_lessons}")
    print(f"sentences: {stats.total_sentences}")
    print(f"feedbacks: {stats.total_feedbacks}")
    print(f"average rating: {stats.average_rating:.2f}")
    return 0


def _cmd_health(console: AdminConsole, args, settings) -> int:
    health = console.analytics.fetch_health()
    print(health.status)
    for key, value in health.details.items():
        print(f"  {key}: {value}")
    return 0 if health.status != "Unhealthy" else 1


def _cmd_delete(console: AdminConsole, args, settings) -> int:
    if args.resource == "topic":
        topic = console.topics.get(args.entity_id)
        if topic is None:
            topic = Topic(id=args.entity_id, name=args.entity_id)
        console.begin_topic_delete(topic)
        console.topic_delete_gate.type(input(f"Type {DELETE_PHRASE} to confirm: "))
        if not console.topic_delete_gate.armed:
            console.topic_delete_gate.cancel()
            return _print_notice(None)
        return _print_notice(console.confirm_topic_delete())

    remove = {
        "category": console.remove_category,
        "lesson": console.remove_lesson,
        "sentence": console.remove_sentence,
    }[args.resource]
    return _print_notice(remove(args.entity_id))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pic2speak-admin", description="Pic2Speak content admin")
    parser.add_argument("--config", default="config.yaml")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("login")
    p.add_argument("--email")
    p.set_defaults(func=_cmd_login)
    sub.add_parser("logout").set_defaults(func=_cmd_logout)
    sub.add_parser("whoami").set_defaults(func=_cmd_whoami)

    p = sub.add_parser("register-request")
    p.add_argument("email")
    p.set_defaults(func=_cmd_register_request)

    sub.add_parser("categories").set_defaults(func=_cmd_categories)

    p = sub.add_parser("topics")
    p.add_argument("category_id")
    p.set_defaults(func=_cmd_topics)

    p = sub.add_parser("lessons")
    p.add_argument("--level", default="all")
    p.add_argument("--topic")
    p.set_defaults(func=_cmd_lessons)

    p = sub.add_parser("lesson")
    p.add_argument("lesson_id")
    p.set_defaults(func=_cmd_lesson)

    p = sub.add_parser("sentences")
    p.add_argument("lesson_id")
    p.set_defaults(func=_cmd_sentences)

    p = sub.add_parser("stats")
    p.add_argument("--range", choices=STATS_RANGES, default="year")
    p.set_defaults(func=_cmd_stats)

    sub.add_parser("health").set_defaults(func=_cmd_health)

    p = sub.add_parser("delete")
    p.add_argument("resource", choices=["category", "topic", "lesson", "sentence"])
    p.add_argument("entity_id")
    p.set_defaults(func=_cmd_delete)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.config)
    configure_logging(settings.log_level)

    def navigate(path: str) -> None:
        print("Session expired. Run `pic2speak-admin login` again.", file=sys.stderr)

    console = AdminConsole.from_settings(settings, navigate=navigate, confirm=_ask_yes_no)
    try:
        return args.func(console, args, settings)
    except ApiError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
