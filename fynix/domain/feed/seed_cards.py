"""Static feed cards shown before any AI fact has been generated."""

import random

from fynix.domain.feed.entities.feed_item import AIFeedItem, FeedQuiz, FeedQuizType

# (category, title, content, question, options, correct index)
_SEED_CARDS: tuple[tuple[str, str, str, str, tuple[str, ...], int], ...] = (
    (
        "Mathe",
        "Prozentrechnung – No Cap",
        "10% von 250 ist 25. Einfach das Komma schieben, Bro. 20%? Verdoppel es einfach. 🔥",
        "Was sind 15% von 200?",
        ("25", "30", "35", "40"),
        1,
    ),
    (
        "Englisch",
        "Irregular Verbs (Tuff Version)",
        "go → went → gone. Lern die auswendig, sonst wird's peinlich im Urlaub. 🌎",
        'Was ist die Past-Form von "see"?',
        ("seed", "saw", "seen", "sawed"),
        1,
    ),
    (
        "Biologie",
        "Photosynthese-Vibe",
        "Pflanzen ziehen CO₂ und Licht, droppen O₂ und Glucose. Ohne die grünen Bros wärst du out of order. 🌿",
        "Was produzieren Pflanzen?",
        ("CO₂", "O₂ + Glucose", "Nur Staub", "Nichts"),
        1,
    ),
    (
        "Weltall",
        "Schwarze Löcher sind wild",
        "Diese Dinger schlucken Licht zum Frühstück. Wer reinspringt, wird wie Spaghetti gedehnt. 🌌",
        "Was passiert in einem schwarzen Loch?",
        ("Man wird gegrillt", "Spaghettisierung", "Man wird reich", "Nichts"),
        1,
    ),
    (
        "History",
        "Römer waren Built Different",
        "Die hatten schon Fußbodenheizung, während andere noch im Wald gepennt haben. 🏛️",
        "Was hatten die Römer schon?",
        ("W-LAN", "Fußbodenheizung", "iPhone", "Tesla"),
        1,
    ),
    (
        "Science",
        "Wassertemperatur-Hack",
        "Heißes Wasser gefriert manchmal schneller als kaltes. Das nennt man Mpemba-Effekt. ❄️",
        "Wie heißt dieser Effekt?",
        ("Fynix-Effekt", "Mpemba-Effekt", "Eis-Hack", "Glace-Move"),
        1,
    ),
    (
        "Tierwelt",
        "Quallen sind Immortal",
        "Es gibt eine Qualle, die wieder zum Baby wird, wenn sie alt ist. Unendlicher Grind! 🪼",
        "Was kann die Turritopsis dohrnii?",
        ("Fliegen", "Sich verjüngen", "Sprechen", "Unsichtbar sein"),
        1,
    ),
    (
        "Tech",
        "Erster Bug war ein echter Käfer",
        '1947 saß eine echte Motte in einem Computer. Seitdem heißen Fehler "Bugs". 🐛',
        "Was war der erste Computer-Bug?",
        ("Ein Softwarefehler", "Eine echte Motte", "Ein Virus", "Kaffee"),
        1,
    ),
    (
        "Geo",
        "Berge wachsen, fr",
        "Der Mount Everest wächst jedes Jahr ein paar Millimeter. Die Erde ist ständig am Gainen. 🏔️",
        "Wächst der Mount Everest?",
        ("Ja", "Nein", "Nur im Sommer", "Er schrumpft"),
        0,
    ),
    (
        "Food",
        "Honig hält ewig",
        "In Ägypten wurde 3000 Jahre alter Honig gefunden, der immer noch essbar war. 🍯",
        "Wie lange hält Honig?",
        ("1 Jahr", "10 Jahre", "Jahrtausende", "1 Monat"),
        2,
    ),
    (
        "Physik",
        "Lichtgeschwindigkeit Speedrun",
        "Licht umrundet die Erde 7,5 Mal pro Sekunde. Ping: 0. ⚡",
        "Wie oft schafft Licht die Erde pro Sekunde?",
        ("1 Mal", "7,5 Mal", "50 Mal", "100 Mal"),
        1,
    ),
    (
        "Bio",
        "Oktopus hat 3 Herzen",
        "Drei Herzen und blaues Blut. Die Jungs sind quasi Aliens aus dem Ozean. 🐙",
        "Wie viele Herzen hat ein Oktopus?",
        ("1", "2", "3", "4"),
        2,
    ),
)


def seed_feed_items() -> list[AIFeedItem]:
    return [
        AIFeedItem(
            category=category,
            title=title,
            content=content,
            quiz=FeedQuiz(
                type=FeedQuizType.MULTIPLE_CHOICE,
                question=question,
                options=list(options),
                correct=correct,
            ),
        )
        for category, title, content, question, options, correct in _SEED_CARDS
    ]


def shuffled_seed_feed(rng: random.Random) -> list[AIFeedItem]:
    items = seed_feed_items()
    rng.shuffle(items)
    return items
