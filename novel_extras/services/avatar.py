import hashlib
from urllib.parse import quote

DARK_COLORS = (
    '1abc9c', '16a085', '27ae60', '2980b9', '8e44ad', '2c3e50',
    'd35400', 'c0392b', '7f8c8d', '6d4c41', '5d4037', '455a64',
    '00695c', '1565c0', '283593', '4527a0', '6a1b9a', 'ad1457',
    'b71c1c', 'e65100', '33691e', '004d40', '263238', '37474f',
)


def _color_for(user_name):
    digest = hashlib.sha1(user_name.encode('utf-8')).digest()
    return DARK_COLORS[int.from_bytes(digest[:8], 'big') % len(DARK_COLORS)]


def avatar_url(user):
    """Gravatar for users with an email, otherwise a generated initials avatar."""
    display_name_encoded = quote(user.display_name, safe='')
    color = _color_for(user.user_name)
    if user.email:
        # The fallback URL is itself a query parameter, so escape it once more.
        fallback_name = display_name_encoded.replace('%', '%25')
        email_hash = hashlib.md5(user.email.encode('utf-8')).hexdigest()
        return (
            f'https://www.gravatar.com/avatar/{email_hash}'
            f'?d=https%3A%2F%2Fui-avatars.com%2Fapi%2F{fallback_name}%2F128%2F{color}%2Fffffff'
        )
    return f'https://ui-avatars.com/api/{display_name_encoded}/128/{color}/ffffff'
