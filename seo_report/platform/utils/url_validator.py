from urllib.parse import urlsplit

from seo_report.features.report.exceptions import MalformedURL


def derive_domain(url: str) -> str:
    """
    Return the host component of an absolute URL exactly as written.

    Scheme, userinfo, port, path, query and fragment are dropped; letter case
    is preserved ("https://Sub.Example.com/x" -> "Sub.Example.com").
    """
    if not isinstance(url, str) or not url.strip():
        raise MalformedURL(str(url), "URL cannot be empty")

    try:
        parsed = urlsplit(url.strip())
        # .port validates the port component and raises ValueError on garbage
        parsed.port
    except ValueError as e:
        raise MalformedURL(url, f"URL parsing error: {e}") from e

    if not parsed.scheme or not parsed.netloc:
        raise MalformedURL(url)

    host = parsed.netloc.rpartition("@")[2]
    if host.startswith("["):
        host = host[1:host.find("]")] if "]" in host else ""
    else:
        host = host.split(":", 1)[0]

    if not host:
        raise MalformedURL(url)
    return host
