from datetime import date, datetime, timedelta, timezone


def parse_day(value):
    # Aware datetimes are converted to UTC; naive ones are taken as UTC
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid ISO-8601 date: {value!r}")
    else:
        raise ValueError(f"Invalid ISO-8601 date: {value!r}")
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def today():
    return datetime.now(timezone.utc).date()


def current_streak(completed_days, reference):
    # walk back from the reference day until a day has no completion
    days = set(completed_days)
    streak = 0
    day = reference
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(completed_days):
    longest = 0
    run = 0
    previous = None
    for day in sorted(set(completed_days)):
        if previous is not None and (day - previous).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def week_dates(reference):
    # Monday through Sunday
    monday = reference - timedelta(days=reference.weekday())
    return [monday + timedelta(days=i) for i in range(7)]


def weekly_view(completed_days, reference):
    days = set(completed_days)
    return [(day, day in days) for day in week_dates(reference)]


def weekly_count(completed_days, reference):
    week = week_dates(reference)
    return sum(1 for day in set(completed_days) if week[0] <= day <= week[-1])


def monthly_count(completed_days, reference):
    return sum(
        1 for day in set(completed_days)
        if day.year == reference.year and day.month == reference.month
    )


def habit_stats(completed_days, reference):
    days = list(completed_days)
    return {
        "current": current_streak(days, reference),
        "longest": longest_streak(days),
        "weeklyCount": weekly_count(days, reference),
        "monthlyCount": monthly_count(days, reference),
        "week": [
            {"date": day.isoformat(), "completed": completed}
            for day, completed in weekly_view(days, reference)
        ],
    }
