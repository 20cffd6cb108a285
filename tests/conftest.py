"""
Pytest configuration and fixtures.
"""
import sys
from pathlib import Path

import pytest

# Add the project root to Python path so tests can import showtime_scout and api
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


CINE_ROYAL_PAGE = """# Cine Royal Cinemas

[VIEW SHOWTIMES](https://cineroyal.ae/home/chooseScreen/4821#showTimeContainer)

Khalidiyah Mall
STANDARD
12:30PMAvailable: 4510:15PMAvailable: 3

Al Dhannah Mall
STANDARD
Sold out

Dalma Mall
STANDARD
7:00PMAvailable: 120
"""

CINE_ROYAL_LINED_PAGE = """# Cine Royal Cinemas

[VIEW SHOWTIMES](https://cineroyal.ae/home/chooseScreen/5107#showTimeContainer)

Dalma Mall
STANDARD
12:30PMAvailable: 45
3:15PMAvailable: 20
7:00PMAvailable: 8

Deerfields Mall
STANDARD
11:00AMAvailable: 12
"""

NOVO_PAGE = r"""## Novo Cinemas

[Dubai Festival City\\
English
- [10:30 AM](https://novocinemas.com/book/1) 2D
- [1:15 PM](https://novocinemas.com/book/2) 2D/7STAR
- [4:00 PM](https://novocinemas.com/book/3)

[Ibn Battuta Mall\\
Arabic
- [9:45 PM](https://novocinemas.com/book/4) IMAX
"""

HEADING_PAGE = """# Showtimes

### Reel Cinemas Dubai Mall

1. **IMAX**
[7:30pm](https://example.com/a) [10:00pm](https://example.com/b)
2. **Dolby Cinema**
[8:15pm](https://example.com/c)

### Roxy Cinemas Box Park
[6:00pm](https://example.com/d)
[9:45pm](https://example.com/e)
"""

VOX_PAGE = """# VOX Cinemas

[Book Now](https://uae.voxcinemas.com/booking/dune)

Mall of the Emirates
IMAX with Laser
10:00 AM
1:30 PM
GOLD
7:45 PM

City Centre Mirdif
4DX
9:15 PM
"""

FREE_TEXT_PAGE = """Dubai Mall - Dubai
English
10:30 AM
2D
1:15 PM
IMAX
Yas Mall - Abu Dhabi
Arabic
9:00 PM
4DX
11:30 PM
"""


@pytest.fixture
def cine_royal_page():
    return CINE_ROYAL_PAGE


@pytest.fixture
def novo_page():
    return NOVO_PAGE


@pytest.fixture
def heading_page():
    return HEADING_PAGE


@pytest.fixture
def vox_page():
    return VOX_PAGE


@pytest.fixture
def free_text_page():
    return FREE_TEXT_PAGE


@pytest.fixture
def cine_royal_lined_page():
    return CINE_ROYAL_LINED_PAGE
