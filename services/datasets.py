"""Bundled curated datasets: music search seeds and football career paths.

Music seeds come in three shapes:

* a plain string is an artist name to search for (strict artist matching);
* ``{"query": ...}`` is an exact free-text search;
* ``{"id": ..., "title": ...}`` resolves one track through the lookup endpoint.

Soundtrack seeds carry a ``title`` (the movie) and either an ``id`` or a
``query``.
"""

from __future__ import annotations

from typing import Dict, List, Union

MusicSeed = Union[str, Dict[str, object]]

MUSIC_SEEDS: Dict[str, List[MusicSeed]] = {
    "music_80s": [
        "Michael Jackson",
        "Madonna",
        "Prince",
        "Whitney Houston",
        "Bon Jovi",
        "Duran Duran",
        "Cyndi Lauper",
        "a-ha",
        "Tears for Fears",
        "Eurythmics",
        "Queen",
        "Depeche Mode",
        "George Michael",
        {"query": "Toto Africa"},
        {"query": "Survivor Eye of the Tiger"},
    ],
    "music_90s": [
        "Nirvana",
        "Spice Girls",
        "Backstreet Boys",
        "Oasis",
        "TLC",
        "Mariah Carey",
        "Red Hot Chili Peppers",
        "Britney Spears",
        "Blur",
        "Alanis Morissette",
        "No Doubt",
        "Green Day",
        "Celine Dion",
        {"query": "Los del Rio Macarena"},
        {"query": "Coolio Gangsta's Paradise"},
    ],
    "music_2000s": [
        "Beyoncé",
        "Eminem",
        "Coldplay",
        "Outkast",
        "Amy Winehouse",
        "The Killers",
        "Nelly Furtado",
        "Kelly Clarkson",
        "Usher",
        "Black Eyed Peas",
        "Linkin Park",
        "Shakira",
        "Gorillaz",
        {"query": "Gnarls Barkley Crazy"},
        {"query": "Daniel Powter Bad Day"},
    ],
    "music_2010s": [
        "Adele",
        "Bruno Mars",
        "Taylor Swift",
        "Ed Sheeran",
        "Lady Gaga",
        "Katy Perry",
        "Drake",
        "Billie Eilish",
        "Dua Lipa",
        "Imagine Dragons",
        "Avicii",
        "The Weeknd",
        "Sia",
        {"query": "Pharrell Williams Happy"},
        {"query": "Mark Ronson Uptown Funk"},
    ],
    "music_hits": [
        "ABBA",
        "The Beatles",
        "Elton John",
        "Fleetwood Mac",
        "Bee Gees",
        "Stevie Wonder",
        "David Bowie",
        "Tina Turner",
        "Rolling Stones",
        "Bob Marley",
        "Aretha Franklin",
        "Elvis Presley",
        {"query": "Gloria Gaynor I Will Survive"},
        {"query": "Village People Y.M.C.A."},
    ],
    "music_movies": [
        {"query": "John Williams Jaws Main Title", "title": "Jaws"},
        {"query": "John Williams Star Wars Main Title", "title": "Star Wars"},
        {"query": "Klaus Badelt He's a Pirate", "title": "Pirates of the Caribbean"},
        {"query": "Vangelis Chariots of Fire", "title": "Chariots of Fire"},
        {"query": "Ennio Morricone The Good the Bad and the Ugly", "title": "The Good, the Bad and the Ugly"},
        {"query": "Howard Shore Concerning Hobbits", "title": "The Lord of the Rings"},
        {"query": "John Williams Hedwig's Theme", "title": "Harry Potter"},
        {"query": "Alan Silvestri Back to the Future", "title": "Back to the Future"},
        {"query": "James Horner Rose Titanic", "title": "Titanic"},
        {"query": "Hans Zimmer Time Inception", "title": "Inception"},
        {"query": "Harold Faltermeyer Axel F", "title": "Beverly Hills Cop"},
        {"query": "Monty Norman James Bond Theme", "title": "Dr. No"},
        {"query": "John Williams Raiders March", "title": "Raiders of the Lost Ark"},
        {"query": "Bill Conti Gonna Fly Now", "title": "Rocky"},
        {"query": "John Williams Theme from Jurassic Park", "title": "Jurassic Park"},
        {"query": "Hans Zimmer Circle of Life", "title": "The Lion King"},
    ],
}

# tier 1 is the most famous career path (200 points), tier 5 the most obscure.
FOOTBALL_CAREERS: List[Dict[str, object]] = [
    {"player": "Cristiano Ronaldo", "tier": 1,
     "clubs": ["Sporting CP", "Manchester United", "Real Madrid", "Juventus", "Al Nassr"]},
    {"player": "David Beckham", "tier": 1,
     "clubs": ["Manchester United", "Real Madrid", "LA Galaxy", "AC Milan", "Paris Saint-Germain"]},
    {"player": "Thierry Henry", "tier": 1,
     "clubs": ["Monaco", "Juventus", "Arsenal", "Barcelona", "New York Red Bulls"]},
    {"player": "Zlatan Ibrahimović", "tier": 1,
     "clubs": ["Malmö FF", "Ajax", "Juventus", "Inter Milan", "Barcelona", "AC Milan",
               "Paris Saint-Germain", "Manchester United", "LA Galaxy"]},
    {"player": "Luis Suárez", "tier": 2,
     "clubs": ["Nacional", "Groningen", "Ajax", "Liverpool", "Barcelona", "Atlético Madrid", "Grêmio", "Inter Miami"]},
    {"player": "Fernando Torres", "tier": 2,
     "clubs": ["Atlético Madrid", "Liverpool", "Chelsea", "AC Milan", "Sagan Tosu"]},
    {"player": "Robin van Persie", "tier": 2,
     "clubs": ["Feyenoord", "Arsenal", "Manchester United", "Fenerbahçe"]},
    {"player": "Ángel Di María", "tier": 2,
     "clubs": ["Rosario Central", "Benfica", "Real Madrid", "Manchester United", "Paris Saint-Germain", "Juventus"]},
    {"player": "Nicolas Anelka", "tier": 3,
     "clubs": ["Paris Saint-Germain", "Arsenal", "Real Madrid", "Liverpool", "Manchester City", "Fenerbahçe",
               "Bolton Wanderers", "Chelsea", "Shanghai Shenhua", "Juventus", "West Bromwich Albion"]},
    {"player": "Romelu Lukaku", "tier": 3,
     "clubs": ["Anderlecht", "Chelsea", "West Bromwich Albion", "Everton", "Manchester United", "Inter Milan",
               "Roma", "Napoli"]},
    {"player": "Edin Džeko", "tier": 3,
     "clubs": ["Željezničar", "Teplice", "Wolfsburg", "Manchester City", "Roma", "Inter Milan", "Fenerbahçe"]},
    {"player": "Gonzalo Higuaín", "tier": 3,
     "clubs": ["River Plate", "Real Madrid", "Napoli", "Juventus", "AC Milan", "Chelsea", "Inter Miami"]},
    {"player": "Craig Bellamy", "tier": 4,
     "clubs": ["Norwich City", "Coventry City", "Newcastle United", "Celtic", "Blackburn Rovers", "Liverpool",
               "West Ham United", "Manchester City", "Cardiff City"]},
    {"player": "Hernán Crespo", "tier": 4,
     "clubs": ["River Plate", "Parma", "Lazio", "Inter Milan", "Chelsea", "AC Milan", "Genoa"]},
    {"player": "Kevin-Prince Boateng", "tier": 4,
     "clubs": ["Hertha BSC", "Tottenham Hotspur", "Borussia Dortmund", "Portsmouth", "AC Milan", "Schalke 04",
               "Las Palmas", "Eintracht Frankfurt", "Barcelona"]},
    {"player": "Mateja Kežman", "tier": 4,
     "clubs": ["Partizan", "PSV Eindhoven", "Chelsea", "Atlético Madrid", "Fenerbahçe", "Paris Saint-Germain"]},
    {"player": "Diego Forlán", "tier": 5,
     "clubs": ["Independiente", "Manchester United", "Villarreal", "Atlético Madrid", "Inter Milan",
               "Internacional", "Cerezo Osaka", "Peñarol"]},
    {"player": "Roque Santa Cruz", "tier": 5,
     "clubs": ["Olimpia", "Bayern Munich", "Blackburn Rovers", "Manchester City", "Málaga"]},
    {"player": "Andriy Shevchenko", "tier": 5,
     "clubs": ["Dynamo Kyiv", "AC Milan", "Chelsea"]},
    {"player": "Nwankwo Kanu", "tier": 5,
     "clubs": ["Iwuanyanwu Nationale", "Ajax", "Inter Milan", "Arsenal", "West Bromwich Albion", "Portsmouth"]},
]
