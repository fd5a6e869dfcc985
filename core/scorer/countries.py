"""
Country name <-> ISO 3166 alpha-2 lookup used by the location factor.
"""

from typing import Dict, Optional, Tuple

COUNTRY_CODES: Dict[str, str] = {
    'vietnam': 'VN',
    'singapore': 'SG',
    'thailand': 'TH',
    'malaysia': 'MY',
    'indonesia': 'ID',
    'philippines': 'PH',
    'myanmar': 'MM',
    'cambodia': 'KH',
    'laos': 'LA',
    'brunei': 'BN',
    'china': 'CN',
    'japan': 'JP',
    'south korea': 'KR',
    'taiwan': 'TW',
    'hong kong': 'HK',
    'india': 'IN',
    'bangladesh': 'BD',
    'pakistan': 'PK',
    'sri lanka': 'LK',
    'nepal': 'NP',
    'australia': 'AU',
    'new zealand': 'NZ',
    'united states': 'US',
    'canada': 'CA',
    'mexico': 'MX',
    'united kingdom': 'GB',
    'germany': 'DE',
    'france': 'FR',
    'netherlands': 'NL',
    'switzerland': 'CH',
    'sweden': 'SE',
    'norway': 'NO',
    'denmark': 'DK',
    'finland': 'FI',
    'ireland': 'IE',
    'belgium': 'BE',
    'austria': 'AT',
    'poland': 'PL',
    'italy': 'IT',
    'spain': 'ES',
    'portugal': 'PT',
    'czech republic': 'CZ',
    'united arab emirates': 'AE',
    'saudi arabia': 'SA',
    'israel': 'IL',
    'qatar': 'QA',
    'south africa': 'ZA',
    'egypt': 'EG',
    'nigeria': 'NG',
    'kenya': 'KE',
    'brazil': 'BR',
    'argentina': 'AR',
    'chile': 'CL',
    'colombia': 'CO',
}

_NAMES_BY_CODE: Dict[str, str] = {code: name for name, code in COUNTRY_CODES.items()}


def resolve_country(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Resolve a free-text country (name or code) to (lowercase name, code).

    Unknown values come back as (value, None) so they can still be
    matched by plain substring.
    """
    if not value or not value.strip():
        return None, None
    text = value.strip().lower()
    if text in COUNTRY_CODES:
        return text, COUNTRY_CODES[text]
    if text.upper() in _NAMES_BY_CODE:
        return _NAMES_BY_CODE[text.upper()], text.upper()
    return text, None
