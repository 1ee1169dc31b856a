import re


def slugify(value):
    """Lowercase, hyphen-separated slug: 'Winter HVAC Tips!' -> 'winter-hvac-tips'."""
    slug = re.sub(r'[^a-z0-9]+', '-', (value or '').lower())
    return slug.strip('-')


def mask_email(email):
    """Mask the local part of an email for logs, keeping the domain."""
    if not email or '@' not in email:
        return '***'
    local, domain = email.split('@', 1)
    if len(local) > 2:
        masked = local[0] + '*' * (len(local) - 2) + local[-1]
    else:
        masked = '***'
    return f"{masked}@{domain}"


def name_from_email(email):
    """'jane.doe@x.com' -> 'Jane Doe'."""
    local = (email or '').split('@')[0]
    return re.sub(r'[._-]+', ' ', local).title().strip()


def is_checked(value):
    """HTML checkbox semantics: 'on', 'true', '1' and 'yes' are checked."""
    if isinstance(value, bool):
        return value
    return str(value or '').strip().lower() in ('on', 'true', '1', 'yes')
