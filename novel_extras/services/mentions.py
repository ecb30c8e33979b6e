import re

MAX_MENTIONS_PER_COMMENT = 5

# Compiled once; shared by every request.
MENTION_PATTERN = re.compile(r'@(\S+)')


def extract_mentions(content):
    """Return the distinct user names mentioned in ``content``, sorted.

    Only the first five ``@name`` occurrences are considered, and duplicates
    are dropped afterwards. A comment that repeats one name five times
    therefore loses any later distinct mention.
    """
    mentioned = []
    for match in MENTION_PATTERN.finditer(content):
        mentioned.append(match.group(1))
        if len(mentioned) >= MAX_MENTIONS_PER_COMMENT:
            break
    return sorted(set(mentioned))
