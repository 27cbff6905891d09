class CustodyCalendarError(Exception):
    pass


class InvalidHolidayRuleError(CustodyCalendarError):
    pass


class InvalidCustomHolidayError(CustodyCalendarError):
    pass


class UnknownPresetError(CustodyCalendarError):
    pass


class OutOfRangeError(CustodyCalendarError):
    pass
