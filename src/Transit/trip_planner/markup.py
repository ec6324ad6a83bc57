from bs4 import BeautifulSoup

ALLOWED_TAGS = {"b", "i", "em", "strong", "div", "span", "wbr", "br"}
DROPPED_TAGS = ("script", "style", "iframe", "object", "embed")


def sanitize_instructions(markup: str) -> str:
    soup = BeautifulSoup(markup or "", "lxml")

    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name in ("html", "body"):
            continue
        if tag.name in ALLOWED_TAGS:
            tag.attrs = {}
        else:
            tag.unwrap()

    body = soup.body
    if body is None:
        return ""
    return body.decode_contents()


def plain_text(markup: str) -> str:
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "lxml")
    return " ".join(soup.get_text(separator=" ").split())
