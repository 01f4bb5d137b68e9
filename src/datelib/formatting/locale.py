from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Locale:
    """
    Names and formatting rules for one locale.

    Weekday tuples start on Sunday. `week_dow` is the first day of the week
    (0 = Sunday) and `week_doy` the moment.js "day of year" rule used for
    local week numbering.
    """

    code: str
    month_names: tuple[str, ...]
    month_names_short: tuple[str, ...]
    weekday_names: tuple[str, ...]
    weekday_names_short: tuple[str, ...]
    meridiem: tuple[str, str] = ("AM", "PM")
    week_dow: int = 0
    week_doy: int = 6
    week_text: str = "Wk"
    date_order: str = "mdy"
    numeric_date_separator: str = "/"
    day_suffix: str = ""
    hour12: bool = True
    separator: str = " - "
    month_names_narrow: tuple[str, ...] = field(default=())
    weekday_names_narrow: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if len(self.month_names) != 12 or len(self.month_names_short) != 12:
            raise ValueError(f"Locale {self.code!r} needs 12 month names.")
        if len(self.weekday_names) != 7 or len(self.weekday_names_short) != 7:
            raise ValueError(f"Locale {self.code!r} needs 7 weekday names.")
        if self.date_order not in ("mdy", "dmy"):
            raise ValueError(f"date_order must be 'mdy' or 'dmy'; got {self.date_order!r}.")
        if not self.month_names_narrow:
            object.__setattr__(self, "month_names_narrow", tuple(n[0] for n in self.month_names))
        if not self.weekday_names_narrow:
            object.__setattr__(self, "weekday_names_narrow", tuple(n[0] for n in self.weekday_names))

    def month_name(self, month: int, style: str) -> str:
        names = {
            "long": self.month_names,
            "short": self.month_names_short,
            "narrow": self.month_names_narrow,
        }[style]
        return names[month - 1]

    def weekday_name(self, weekday: int, style: str) -> str:
        names = {
            "long": self.weekday_names,
            "short": self.weekday_names_short,
            "narrow": self.weekday_names_narrow,
        }[style]
        return names[weekday]


_EN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_EN_WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

_DE_MONTHS = (
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
)
_DE_WEEKDAYS = ("Sonntag", "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag")

locales: dict[str, Locale] = {
    "en": Locale(
        code="en",
        month_names=_EN_MONTHS,
        month_names_short=tuple(n[:3] for n in _EN_MONTHS),
        weekday_names=_EN_WEEKDAYS,
        weekday_names_short=tuple(n[:3] for n in _EN_WEEKDAYS),
    ),
    "en-gb": Locale(
        code="en-gb",
        month_names=_EN_MONTHS,
        month_names_short=tuple(n[:3] for n in _EN_MONTHS),
        weekday_names=_EN_WEEKDAYS,
        weekday_names_short=tuple(n[:3] for n in _EN_WEEKDAYS),
        week_dow=1,
        week_doy=4,
        date_order="dmy",
        hour12=False,
    ),
    "de": Locale(
        code="de",
        month_names=_DE_MONTHS,
        month_names_short=(
            "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
            "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez.",
        ),
        weekday_names=_DE_WEEKDAYS,
        weekday_names_short=("So.", "Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa."),
        week_dow=1,
        week_doy=4,
        week_text="KW",
        date_order="dmy",
        numeric_date_separator=".",
        day_suffix=".",
        hour12=False,
    ),
}


def register_locale(locale: Locale) -> None:
    locales[locale.code.lower()] = locale


def get_locale(code: str | Locale = "en") -> Locale:
    """
    Look up a locale by code, falling back to the language part of the code
    ('en-us' → 'en') and finally to English.
    """
    if isinstance(code, Locale):
        return code
    key = code.lower().replace("_", "-")
    if key in locales:
        return locales[key]
    lang = key.split("-", 1)[0]
    return locales.get(lang, locales["en"])
