DAYS_IN_MONTH = {
    1: 31,
    2: 29,  # max days, leap years included
    3: 31,
    4: 30,
    5: 31,
    6: 30,
    7: 31,
    8: 31,
    9: 30,
    10: 31,
    11: 30,
    12: 31,
}

FIBONACCI = {0, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144, 233, 377, 610, 987, 1597, 2584,
             4181, 6765, 10946, 17711, 28657, 46368, 75025}

ROUND_NUMBERS = {3: (100, 'Hundred'), 4: (1000, 'Thousand'), 5: (10_000, 'Ten Thousand')}


def pad(number: int, digits: int) -> str:
    return str(number).zfill(digits)[-digits:]


def is_palindrome(s: str) -> bool:
    return s == s[::-1]


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    c = 3
    while c * c <= n:
        if n % c == 0:
            return False
        c += 2
    return True


def is_alternating(s: str) -> bool:
    # ABAB, ABA, ABABA with A != B
    return len(s) > 1 and s[0] != s[1] and all(ch == s[i % 2] for i, ch in enumerate(s))


def has_run(s: str, length: int) -> bool:
    return any(len(set(s[i:i + length])) == 1 for i in range(len(s) - length + 1))


def is_double_pair(s: str) -> bool:
    if len(s) == 4:
        return s[0] == s[1] and s[2] == s[3]
    if len(s) == 5:
        return s[1] == s[2] and s[3] == s[4]
    return False


def is_date(day: int, month: int) -> bool:
    return 1 <= month <= 12 and 1 <= day <= DAYS_IN_MONTH[month]


def special_properties(number: int, digits: int) -> list:
    s = pad(number, digits)
    out = []
    if is_palindrome(s):
        out.append('Palindrome')
    if is_prime(number):
        out.append('Prime')
    if number in FIBONACCI:
        out.append('Fibonacci')
    if is_alternating(s):
        out.append('Alternating')
    if has_run(s, 2):
        out.append('Double')
    if is_double_pair(s):
        out.append('Double Pair')
    if digits == 4:
        if is_date(int(s[:2]), int(s[2:])):
            out.append('Birthday')
        if is_date(int(s[2:]), int(s[:2])):
            out.append('Birthday (US)')
    if has_run(s, 3):
        out.append('Triple')
    if digits >= 4 and has_run(s, 4):
        out.append('Quadruple')
    if digits == 5 and has_run(s, 5):
        out.append('Quintuple')
    if digits in ROUND_NUMBERS:
        divisor, name = ROUND_NUMBERS[digits]
        if number % divisor == 0:
            out.append(name)
    return out
