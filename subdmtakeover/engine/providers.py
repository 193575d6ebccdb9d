from __future__ import annotations

"""Static fingerprint table of hosting providers and the body matcher.

Each entry identifies the default "resource not found" page a provider serves
when a custom domain still points at it but the backing resource is gone.
Order matters: when several fingerprints match the same body, the first entry
wins.
"""

import re
from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class Provider:
    name: str
    fingerprint: "re.Pattern[str]"


def _provider(name: str, pattern: str) -> Provider:
    return Provider(name=name, fingerprint=re.compile(pattern))


PROVIDERS: Tuple[Provider, ...] = (
    _provider("Amazon S3", r"<Code>NoSuchBucket</Code>"),
    _provider("Heroku", r"There's nothing here."),
    _provider("GitHub Pages", r"There isn't a GitHub Pages site here."),
    _provider("GitLab Pages", r"<title>.* - GitLab Pages</title>"),
    _provider(
        "Microsoft Azure",
        r"The resource you are looking for has been removed, had its name changed, or is temporarily unavailable.",
    ),
    _provider("Fastly", r"Fastly error: unknown domain:"),
    _provider("WordPress.com", r"Do you want to register .*"),
    _provider("Tilda", r"<title>.* – is this your website\?</title>"),
    _provider("Shopify", r"Sorry, this shop is currently unavailable."),
    _provider("Netlify", r"<title>Site Not Found</title>"),
    _provider("Pantheon", r"<title>.* is parked on Pantheon</title>"),
    _provider(
        "Tumblr",
        r"There's nothing here\. <a href=\"https://www.tumblr.com\">Whatever you were looking for doesn't currently exist at this address\.</a>",
    ),
    _provider("Cloudflare", r"Error 1001 \| DNS resolution error"),
    _provider("Fly", r"404 Site .*fly.dev is not served on this interface"),
    _provider("Cargo", r"<title>404 Page Not Found \| Cargo</title>"),
    _provider("Unbounce", r"<title>.* - Unbounce</title>"),
    _provider("Surge", r"project not found"),
    _provider("Webflow", r"The page you are looking for doesn't exist or has been moved."),
    _provider("Read the Docs", r"This domain is not served by Read the Docs"),
    _provider("Hatena Blog", r"The page you were looking for doesn't exist \(404\)"),
    _provider("Help Scout", r"No settings were found for this company:"),
    _provider("Zendesk", r"Help Center Closed"),
    _provider("Kinsta", r"No Site For Domain"),
    _provider("Ghost", r"<title>Ghost \| Sign in</title>"),
    _provider("Acquia", r"Site not found · Acquia"),
    _provider("Big Cartel", r"This shop is not available"),
    _provider("Bitbucket", r"Repository not found"),
    _provider(
        "Brightcove",
        r"The page you have requested has been removed or is temporarily unavailable.",
    ),
    _provider("Campaign Monitor", r"double-check that the domain is correctly configured"),
    _provider("Cargo Collective", r"You have reached a domain that is pending ICANN verification"),
    _provider("Desk", r"Please try again or try Desk.com free for 14 days"),
    _provider("Distil Networks", r"The requested URL was not found on this server."),
    _provider("Freshdesk", r"The page you're looking for is currently unavailable"),
    _provider("G Suite", r"Sorry, this page is not available"),
    _provider("Intercom", r"This page is no longer available"),
    _provider(
        "Launchrock",
        r"It looks like you may have taken a wrong turn somewhere. Don't worry...it happens to all of us.",
    ),
    _provider("Mashery", r"Unrecognized domain"),
    _provider("StatusPage", r"You've Discovered A Missing Link"),
    _provider("Strikingly", r"Looks like you've accessed a page that doesn't exist"),
    _provider("Thinkific", r"You may have mistyped the address or the page may have moved"),
    _provider("Tictail", r"There's nothing here... yet"),
    _provider("Uptime Robot", r"This domain is no longer being monitored"),
    _provider("Uservoice", r"This UserVoice subdomain is currently available!"),
    _provider("Wishpond", r"This account has been deactivated"),
    _provider("Wix", r"Looks like this domain isn't connected to a website yet!"),
    _provider("Wordpress", r"Do you want to register this domain and start building your website?"),
    _provider("Worksites", r"Sorry, we couldn't find the page you're looking for"),
)


def match_fingerprint(body: Union[bytes, str, None]) -> Tuple[bool, str]:
    """Return `(True, provider name)` for the first fingerprint found in body.

    Bytes are decoded as UTF-8 with replacement so a stray invalid sequence
    does not hide a fingerprint elsewhere in the page.
    """
    if not body:
        return False, ""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    for provider in PROVIDERS:
        if provider.fingerprint.search(text):
            return True, provider.name
    return False, ""
