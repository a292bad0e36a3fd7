"""Static lexicon tables shared by the classifier, scenario extractor and query builder.

Keyword tables are dicts whose insertion order is significant: it is the
tie-break order for equal scores. Regex cascades are tuples of
``(value, pattern)`` pairs evaluated top to bottom, first match wins.
"""

import re
from typing import Optional


def _compile(pairs: tuple[tuple[str, str], ...]) -> tuple[tuple[str, re.Pattern[str]], ...]:
    """Compile ``(value, regex)`` pairs case-insensitively, preserving order."""
    return tuple((value, re.compile(pattern, re.IGNORECASE)) for value, pattern in pairs)


def first_match(
    table: tuple[tuple[str, re.Pattern[str]], ...], text: str
) -> Optional[str]:
    """Return the value of the first pattern in ``table`` that matches ``text``."""
    for value, pattern in table:
        if pattern.search(text):
            return value
    return None


def all_matches(table: tuple[tuple[str, re.Pattern[str]], ...], text: str) -> list[str]:
    """Return the values of every pattern in ``table`` that matches ``text``."""
    return [value for value, pattern in table if pattern.search(text)]


# ---------------------------------------------------------------------------
# Mood keywords (keyword sets are disjoint across moods)
# ---------------------------------------------------------------------------

MOOD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "happy": (
        "happy", "joy", "joyful", "excited", "cheerful", "upbeat", "smile",
        "laugh", "sunny", "bright", "glad", "delighted",
    ),
    "sad": (
        "sad", "depressed", "melancholy", "blue", "heartbroken", "tears",
        "crying", "lonely", "gloomy", "sorrow", "miserable",
    ),
    "energetic": (
        "energetic", "pumped", "energized", "powerful", "dynamic", "intense",
        "hyped", "adrenaline", "workout", "exercise", "strong",
    ),
    "calm": (
        "calm", "placid", "serene", "tranquil", "soothing", "gentle",
        "mindful", "unwind", "soft",
    ),
    "angry": (
        "angry", "frustrated", "furious", "enraged", "annoyed", "aggressive",
        "irritated", "angst", "violent", "pissed",
    ),
    "romantic": (
        "romantic", "love", "passionate", "intimate", "romance", "date",
        "valentine", "kiss", "tender", "sweetheart",
    ),
    "nostalgic": (
        "nostalgic", "memories", "remember", "throwback", "retro", "vintage",
        "childhood", "reminisce", "oldies",
    ),
    "peaceful": (
        "peaceful", "quiet", "silent", "hush", "tranquility", "harmony",
        "stillness", "restful",
    ),
    "focused": (
        "focused", "concentrated", "concentrate", "study", "productive",
        "brainstorming", "coding", "attention", "alert", "deadline",
    ),
    "party": (
        "party", "dance", "club", "celebration", "festival", "dancing",
        "clubbing", "lively", "wild",
    ),
    "chill": (
        "chill", "laid-back", "easy", "lofi", "mellow", "smooth", "relaxing",
        "chilled", "relaxed", "cozy", "casual",
    ),
    "inspirational": (
        "inspirational", "motivational", "inspiring", "inspired",
        "encouraging", "empowering", "uplifting", "hopeful", "determined",
    ),
    "cinematic": (
        "cinematic", "movie", "film", "dramatic", "epic", "orchestral",
        "soundtrack", "scene", "grand",
    ),
    "urban": (
        "urban", "city", "street", "downtown", "metropolitan", "nightlife",
        "cityscape", "subway",
    ),
    "nature": (
        "nature", "outdoor", "forest", "mountain", "ocean", "beach",
        "wilderness", "natural", "earth", "river",
    ),
    "dreamy": (
        "dreamy", "ethereal", "float", "floating", "cloud", "dream",
        "surreal", "otherworldly", "magical", "fantasy",
    ),
    "introspective": (
        "introspective", "reflective", "thoughtful", "contemplative",
        "meditative", "philosophical", "thinking", "pondering", "deep",
    ),
}

THEME_KEYWORDS: dict[str, tuple[str, ...]] = {
    "night": ("night", "evening", "dark", "moon", "stars", "midnight", "late", "nighttime", "dusk", "twilight"),
    "morning": ("morning", "dawn", "sunrise", "early", "breakfast", "start", "awake", "fresh"),
    "summer": ("summer", "sun", "heat", "warm", "beach", "vacation", "holiday", "sunny", "hot", "outdoor"),
    "winter": ("winter", "cold", "snow", "frost", "ice", "chilly", "freezing", "cozy", "fireplace"),
    "rain": ("rain", "rainy", "wet", "storm", "thunder", "lightning", "drizzle", "downpour", "umbrella"),
    "travel": ("travel", "journey", "adventure", "explore", "discover", "road", "trip", "voyage", "wander"),
    "workout": ("workout", "exercise", "gym", "fitness", "training", "sport", "athletic", "strength", "endurance"),
    "study": ("study", "learning", "education", "academic", "school", "university", "college", "research", "exam", "finals"),
    "meditation": ("meditation", "mindfulness", "zen", "yoga", "breath", "peace", "serenity", "balance"),
    "party": ("party", "celebration", "festival", "dance", "club", "social", "gathering", "event", "fun"),
}

# ---------------------------------------------------------------------------
# Context overrides: applied when the primary mood is weak, first match wins
# ---------------------------------------------------------------------------

CONTEXT_OVERRIDES = _compile((
    ("focused", r"\b(?:stud(?:y|i)|work(?!out)|focus|concentrat|brainstorm|coding)"),
    ("party", r"\b(?:part(?:y|ies)|danc|celebrat|festival)"),
    ("chill", r"\b(?:chill|relax|background|lo-?fi)"),
    ("inspirational", r"\b(?:inspir|motivat|encourag)"),
    ("cinematic", r"\b(?:cinematic|movie|film|soundtrack|scene|main character)"),
))

# Score at or above which the primary mood is left alone by the overrides
OVERRIDE_SCORE_THRESHOLD = 3

# ---------------------------------------------------------------------------
# Input type indicators
# ---------------------------------------------------------------------------

MOOD_INDICATORS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\bfeel(?:ing)?\s+(\w+)",
        r"\bi'?m\s+(\w+)",
        r"\bi'?m\s+feeling\s+(\w+)",
        r"\bmood\s+(\w+)",
        r"\bemotion(?:ally)?\s+(\w+)",
        r"\b(\w+)\s+mood\b",
        r"\bfeeling\s+(\w+)",
        r"\b(\w+)\s+emotion",
        r"\b(\w+)\s+feeling\b",
    )
)

SCENARIO_INDICATORS = tuple(
    re.compile(rf"\b{word}\s+(\w+)", re.IGNORECASE)
    for word in (
        "at", "in", "on", "with", "while", "during", "for", "studying",
        "working", "exercising", "running", "driving", "walking", "chilling",
        "relaxing", "partying", "dancing", "meditating", "yoga", "reading",
        "writing", "coding", "brainstorming", "hackathon",
    )
)

MOOD_WORDS = (
    "happy", "sad", "angry", "excited", "calm", "relaxed", "energetic",
    "tired", "focused", "inspired",
)

SCENARIO_WORDS = (
    "beach", "library", "gym", "party", "concert", "work", "study", "home",
    "office", "car", "train", "bus", "plane",
)

# ---------------------------------------------------------------------------
# Scenario pattern tables (order is the match precedence)
# ---------------------------------------------------------------------------

ACTIVITY_PATTERNS = _compile((
    ("studying", r"\b(?:stud(?:y|i)|learn|read|work(?!out)|focus|brainstorm|hackathon|research|academic|school|universit|college|knowledge|intellectual|exam|finals)"),
    ("exercising", r"\b(?:workout|exercis|run|gym|fitness|training|sport|athletic|active|strength|endurance|jog|swim|bike|yoga)"),
    ("relaxing", r"\b(?:relax|chill|rest|meditat|unwind|decompress|calm|peace|tranquil|serenity|balance|zen)"),
    ("partying", r"\b(?:part(?:y|ies)|danc|club|celebrat|festival|fun|upbeat|wild|crazy|loud|lively|gathering)"),
    ("commuting", r"\b(?:commut|travel|driv|walk|journey|road|trip|voyage|wander|roam|transport|transit|bus|train|plane|metro)"),
    ("socializing", r"\b(?:hang|meet|social|friends|family|group|together|company|conversation|chat|talk)"),
    ("working", r"\b(?:job|office|desk|computer|laptop|meeting|project|task|deadline|professional|business|career)"),
    ("creative", r"\b(?:creat|art|paint|draw|design|writ|compos|poem|story|novel|blog|content)"),
))

SETTING_PATTERNS = _compile((
    ("nature", r"\b(?:nature|outdoors|park|forest|beach|mountain|ocean|wilderness|natural|organic|earth|green|garden|lake|river)"),
    ("urban", r"\b(?:city|street|downtown|urban|building|metropolitan|nightlife|night|cityscape|metropolis|neighborhood|district)"),
    ("home", r"\b(?:home|house|room|apartment|bedroom|living room|kitchen|couch|sofa|bed)\b"),
    ("office", r"\b(?:office|work(?!out)|desk|studio|cubicle|meeting room|conference|boardroom|classroom|lecture hall|library|cafe|coffee shop)"),
    ("transport", r"\b(?:car|bus|train|plane|metro|subway|taxi|uber|lyft|bicycle|motorcycle|boat|ship|ferry)\b"),
    ("entertainment", r"\b(?:concert|show|movie|theater|cinema|stage|performance|festival|club|bar|pub|restaurant)\b"),
))

TIME_OF_DAY_PATTERNS = _compile((
    ("morning", r"\b(?:morning|dawn|sunrise|breakfast|early|awake|new day|first thing)"),
    ("afternoon", r"\b(?:afternoon|noon|lunch|midday|middle of the day|daytime)"),
    ("evening", r"\b(?:evening|sunset|dusk|dinner|nightfall|twilight|after work|after school)"),
    ("night", r"\b(?:night|midnight|late|nighttime|moon|stars|after dark|bedtime)"),
))

ENERGY_PATTERNS = _compile((
    ("low", r"\b(?:relax|chill|calm|peaceful|quiet|serene|tranquil|gentle|soft|soothing|peace|low energy|slow|easy)"),
    ("medium", r"\b(?:moderate|balanced|steady|consistent|regular|normal|average|middle|medium)"),
    ("high", r"\b(?:energetic|active|dynamic|intense|powerful|strong|vigorous|high energy|fast|quick|rapid|brisk)"),
))

SOCIAL_PATTERNS = _compile((
    ("alone", r"\b(?:alone|by myself|solo|myself|individual|personal|private|solitude|quiet time|me time)"),
    ("with_friends", r"\b(?:friends|buddies|mates|pals|companions|friend group|social circle)"),
    ("with_family", r"\b(?:family|relatives|parents|siblings|brothers|sisters|cousins)"),
    ("in_crowd", r"\b(?:crowd|people|public|audience|spectators|strangers|everyone|everybody)"),
))

INSTRUMENTAL_PATTERNS = _compile((
    ("instrumental", r"\b(?:instrumental|no vocals|no lyrics|without lyrics|background|ambient|atmospheric|soundtrack|score|music only|just music)"),
    ("with_lyrics", r"\bwith (?:lyrics|vocals|singing|words|voices?|singers|vocalists)"),
))

# Narrow patterns used for the "Perfect for ..." clause of explanations
CONTEXT_TIME_PATTERNS = _compile((
    ("morning", r"\b(?:morning|dawn|sunrise|breakfast)"),
    ("afternoon", r"\b(?:afternoon|noon|lunch)"),
    ("evening", r"\b(?:evening|sunset|dusk)"),
    ("night", r"\b(?:night|midnight|late)"),
))

CONTEXT_ACTIVITY_PATTERNS = _compile((
    ("studying", r"\b(?:stud(?:y|i)|learn|read|work(?!out)|focus|brainstorm|hackathon)"),
    ("exercising", r"\b(?:workout|exercis|run|gym|fitness)"),
    ("relaxing", r"\b(?:relax|chill|rest|meditat|yoga)"),
    ("partying", r"\b(?:part(?:y|ies)|danc|celebrat|festival)"),
    ("commuting", r"\b(?:commut|travel|driv|walk|journey)"),
    ("socializing", r"\b(?:hang|meet|social|friends)"),
))

CONTEXT_SETTING_PATTERNS = _compile((
    ("nature", r"\b(?:nature|outdoors|park|forest|beach|mountain)"),
    ("urban", r"\b(?:city|street|downtown|urban)"),
    ("home", r"\b(?:home|house|room|apartment|bedroom)"),
    ("office", r"\b(?:office|work(?!out)|desk|studio)"),
    ("transport", r"\b(?:car|bus|train|plane|metro)\b"),
))

# ---------------------------------------------------------------------------
# Raw search formatting
# ---------------------------------------------------------------------------

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "some", "something", "need", "want", "like", "me",
    "my", "i'm", "im", "is", "are", "that", "this",
})

SIGNIFICANT_PHRASES = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"work out", r"study session", r"road trip", r"beach day",
        r"night out", r"morning routine", r"evening walk", r"party time",
        r"chill vibes", r"focus mode",
    )
)

CONCEPT_PATTERNS = _compile((
    ("relaxation", r"\b(?:relax|chill|calm|peace|tranquil|serene|quiet|gentle|soothing)"),
    ("energy", r"\b(?:energy|power|strength|force|drive|motivation|strong|dynamic|intense)"),
    ("creativity", r"\b(?:creativ|art|design|imagin|inspir|innovative|original|unique)"),
    ("focus", r"\b(?:focus|concentrat|attention|mindful|alert|sharp)"),
    ("celebration", r"\b(?:celebrat|part(?:y|ies)|festival|holiday|occasion|gathering)"),
    ("reflection", r"\b(?:reflect|think|contemplat|meditat|ponder|thoughtful|introspective)"),
    ("adventure", r"\b(?:adventure|explor|discover|journey|travel|voyage|wander|roam|trek|expedition)"),
    ("romance", r"\b(?:romance|love|passion|intimate|romantic|date|valentine|kiss)"),
    ("nostalgia", r"\b(?:nostalgi|memor|remember|retro|vintage|throwback|childhood)"),
    ("nature", r"\b(?:nature|outdoor|forest|mountain|ocean|beach|wilderness)"),
))

TEMPORAL_PATTERNS = TIME_OF_DAY_PATTERNS + _compile((
    ("season", r"\b(?:spring|summer|fall|autumn|winter)\b"),
))

SPATIAL_PATTERNS = _compile((
    ("indoor", r"\b(?:indoor|inside|room|house|apartment|building|office|school|library|cafe|restaurant|bar|club|gym|studio)"),
    ("outdoor", r"\b(?:outdoor|outside|park|beach|mountain|forest|garden|yard|field|trail|wilderness|nature)"),
    ("urban", r"\b(?:urban|city|town|downtown|uptown|suburb|neighborhood|street|highway)"),
    ("rural", r"\b(?:rural|countryside|farm|ranch|village|lake|river|stream)"),
))

# Genre hints keyed by context cues, appended to formatted raw searches
CONTEXT_GENRE_HINTS = (
    (re.compile(r"workout|exercise|gym|fitness", re.IGNORECASE), ("workout", "rock", "electronic", "hip hop")),
    (re.compile(r"study|focus|work(?!out)|concentrate", re.IGNORECASE), ("ambient", "classical", "lofi", "instrumental")),
    (re.compile(r"party|dance|celebration", re.IGNORECASE), ("dance", "pop", "electronic", "house")),
    (re.compile(r"relax|chill|calm", re.IGNORECASE), ("ambient", "chill", "jazz", "lofi")),
    (re.compile(r"happy|joy|excited", re.IGNORECASE), ("pop", "dance", "disco")),
    (re.compile(r"sad|melancholy|emotional", re.IGNORECASE), ("acoustic", "piano", "indie")),
    (re.compile(r"energetic|powerful|strong", re.IGNORECASE), ("rock", "metal", "electronic")),
)

# ---------------------------------------------------------------------------
# Per-mood catalog hints
# ---------------------------------------------------------------------------

DEFAULT_GENRES = ("pop", "rock", "indie", "electronic")

MOOD_GENRES: dict[str, tuple[str, ...]] = {
    "happy": ("pop", "dance", "disco", "funk", "soul", "r-n-b"),
    "sad": ("acoustic", "piano", "folk", "indie", "alternative"),
    "energetic": ("rock", "metal", "punk", "electronic", "dance"),
    "calm": ("ambient", "classical", "jazz", "chill", "meditation"),
    "angry": ("metal", "rock", "punk", "grunge", "industrial"),
    "romantic": ("r-n-b", "soul", "jazz", "pop", "indie"),
    "nostalgic": ("classic", "rock", "pop", "folk", "jazz"),
    "peaceful": ("ambient", "classical", "meditation", "chill", "jazz"),
    "focused": ("ambient", "classical", "electronic", "chill", "lofi", "instrumental"),
    "party": ("dance", "pop", "electronic", "hip-hop", "house", "edm"),
    "chill": ("lofi", "chill", "ambient", "jazz", "indie"),
    "inspirational": ("pop", "rock", "indie", "electronic", "ambient"),
    "cinematic": ("classical", "ambient", "electronic", "orchestral", "soundtrack"),
    "urban": ("hip-hop", "r-n-b", "soul", "electronic", "pop"),
    "nature": ("ambient", "folk", "acoustic", "world", "new-age"),
    "dreamy": ("ambient", "electronic", "chill", "indie", "dream-pop"),
    "introspective": ("ambient", "acoustic", "piano", "indie", "folk"),
    "neutral": ("pop", "rock", "indie", "electronic", "alternative"),
}

ACTIVITY_GENRES: dict[str, tuple[str, ...]] = {
    "studying": ("classical", "jazz", "ambient", "lofi", "instrumental"),
    "exercising": ("rock", "hip hop", "electronic", "edm", "workout"),
    "relaxing": ("ambient", "classical", "jazz", "chill", "meditation"),
    "partying": ("pop", "dance", "electronic", "house", "edm"),
    "commuting": ("rock", "pop", "indie", "alternative", "road trip"),
    "socializing": ("pop", "indie", "folk", "acoustic", "social"),
    "working": ("ambient", "classical", "jazz", "lofi", "focus"),
    "creative": ("ambient", "electronic", "indie", "experimental", "creative"),
}

_CALM_ARTISTS = ("Brian Eno", "Ludovico Einaudi", "Max Richter", "Nils Frahm")
_CHILL_ARTISTS = ("Tycho", "Bonobo", "Nujabes", "Zero 7")
DEFAULT_ARTISTS = ("Coldplay", "The Killers", "Imagine Dragons")

MOOD_ARTISTS: dict[str, tuple[str, ...]] = {
    "happy": ("Pharrell Williams", "Bruno Mars", "Daft Punk", "The Beatles"),
    "sad": ("Adele", "Ed Sheeran", "Bon Iver", "The Smiths"),
    "energetic": ("AC/DC", "Linkin Park", "The Prodigy", "Daft Punk"),
    "calm": _CALM_ARTISTS,
    "angry": ("Rage Against the Machine", "System of a Down", "Nine Inch Nails"),
    "romantic": ("John Legend", "Adele", "Ed Sheeran", "Sam Smith"),
    "nostalgic": ("The Beatles", "Queen", "David Bowie", "Fleetwood Mac"),
    "peaceful": _CALM_ARTISTS,
    "focused": _CALM_ARTISTS,
    "party": ("Daft Punk", "Calvin Harris", "David Guetta", "The Weeknd"),
    "chill": _CHILL_ARTISTS,
    "inspirational": ("Coldplay", "U2", "Imagine Dragons", "OneRepublic"),
    "cinematic": ("Hans Zimmer", "John Williams", "Danny Elfman", "Howard Shore"),
    "urban": ("Drake", "The Weeknd", "Kendrick Lamar", "Childish Gambino"),
    "nature": _CALM_ARTISTS,
    "dreamy": _CHILL_ARTISTS,
    "introspective": ("Bon Iver", "Radiohead", "Sigur Rós", "Explosions in the Sky"),
    "neutral": ("Coldplay", "The Killers", "Imagine Dragons", "OneRepublic"),
}

_CALM_SONGS = (
    "Weightless", "Clair de Lune", "River Flows in You",
    "Comptine d'un autre été", "Gymnopédie No.1",
)
DEFAULT_SONGS = ("Shape of You", "Blinding Lights", "Stay", "As It Was", "About Damn Time")

MOOD_SONGS: dict[str, tuple[str, ...]] = {
    "happy": ("Happy", "Walking on Sunshine", "I Gotta Feeling", "Good Life", "Can't Stop the Feeling"),
    "sad": ("Someone Like You", "All of Me", "Stay With Me", "Say Something", "The Sound of Silence"),
    "energetic": ("Eye of the Tiger", "Stronger", "Can't Hold Us", "Power", "Fighter"),
    "calm": _CALM_SONGS,
    "angry": ("Break Stuff", "Given Up", "Bodies", "Killing in the Name", "Bleed It Out"),
    "romantic": ("All of Me", "Perfect", "Just the Way You Are", "Marry You", "A Thousand Years"),
    "nostalgic": ("Sweet Home Alabama", "Don't Stop Believin'", "Sweet Child O' Mine", "Bohemian Rhapsody", "Hotel California"),
    "peaceful": _CALM_SONGS,
    "focused": _CALM_SONGS,
    "party": ("Uptown Funk", "Can't Stop the Feeling", "I Gotta Feeling", "Get Lucky", "Shake It Off"),
    "chill": _CALM_SONGS,
    "inspirational": ("Stronger", "Fighter", "Roar", "Brave", "Unwritten"),
    "cinematic": ("Time", "Pirates of the Caribbean", "Star Wars", "Lord of the Rings", "Inception"),
    "urban": ("Empire State of Mind", "New York", "City of Stars", "Welcome to New York", "Downtown"),
    "nature": _CALM_SONGS,
    "dreamy": _CALM_SONGS,
    "introspective": ("The Sound of Silence", "Hurt", "Mad World", "Creep", "Boulevard of Broken Dreams"),
    "neutral": DEFAULT_SONGS,
}

# (energy, valence, danceability) targets for seed-track recommendation calls
MOOD_AUDIO_TARGETS: dict[str, tuple[float, float, float]] = {
    "happy": (0.8, 0.8, 0.7),
    "sad": (0.3, 0.2, 0.3),
    "energetic": (0.9, 0.7, 0.8),
    "calm": (0.3, 0.6, 0.3),
    "angry": (0.9, 0.3, 0.6),
    "romantic": (0.5, 0.7, 0.4),
    "nostalgic": (0.4, 0.5, 0.5),
    "peaceful": (0.2, 0.7, 0.2),
    "focused": (0.4, 0.5, 0.3),
    "party": (0.9, 0.8, 0.9),
    "chill": (0.3, 0.6, 0.4),
    "inspirational": (0.7, 0.8, 0.5),
    "cinematic": (0.6, 0.5, 0.3),
    "urban": (0.7, 0.6, 0.7),
    "nature": (0.4, 0.7, 0.3),
    "dreamy": (0.3, 0.6, 0.3),
    "introspective": (0.3, 0.4, 0.2),
    "neutral": (0.5, 0.5, 0.5),
}


def genres_for_mood(mood: str) -> tuple[str, ...]:
    """Genre hints for a mood, most characteristic first."""
    return MOOD_GENRES.get(mood.lower(), DEFAULT_GENRES)


def genres_for_activity(activity: Optional[str]) -> tuple[str, ...]:
    """Genre hints for a scenario activity (empty when unknown)."""
    if not activity:
        return ()
    return ACTIVITY_GENRES.get(activity, ())


def artists_for_mood(mood: str) -> tuple[str, ...]:
    """Well-known artists associated with a mood."""
    return MOOD_ARTISTS.get(mood.lower(), DEFAULT_ARTISTS)


def songs_for_mood(mood: str) -> tuple[str, ...]:
    """Canonical song titles associated with a mood."""
    return MOOD_SONGS.get(mood.lower(), DEFAULT_SONGS)
