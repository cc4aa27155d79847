"""Language -> trading card theme lookup.

The tables are read-only for the life of the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .models import TypeMatchup


@dataclass(frozen=True)
class AttackFlavor:
    name: str
    description: str


@dataclass(frozen=True)
class LanguageCardTheme:
    type: str
    border_color: str
    accent_color: str
    emoji: str
    light: AttackFlavor
    heavy: AttackFlavor


def _theme(type_, border, accent, emoji, light, heavy):
    return LanguageCardTheme(type_, border, accent, emoji, AttackFlavor(*light), AttackFlavor(*heavy))


LANGUAGE_CARD_THEMES = MappingProxyType({
    "Python": _theme("Fire", "#E25822", "#FF6B35", "\U0001F525",
                     ("Flame Script", "Executes a blazing runtime sequence"),
                     ("Inferno Deploy", "Deploys a firestorm of production builds")),
    "TypeScript": _theme("Electric", "#3178C6", "#58A6FF", "⚡",
                         ("Type Strike", "Compiles with strict type checking"),
                         ("Thunder Compile", "Unleashes a storm of type definitions")),
    "JavaScript": _theme("Electric", "#F0DB4F", "#F7E05A", "⚡",
                         ("Callback Surge", "Chains async operations rapidly"),
                         ("Runtime Storm", "Floods the event loop with promises")),
    "Go": _theme("Water", "#00ADD8", "#29BEB0", "\U0001F4A7",
                 ("Goroutine Flow", "Spawns concurrent execution streams"),
                 ("Channel Torrent", "Cascades data through pipelines")),
    "Rust": _theme("Steel", "#DEA584", "#E8A87C", "⚙️",
                   ("Borrow Check", "Validates memory safety at compile time"),
                   ("Unsafe Smelt", "Forges raw pointer operations")),
    "Java": _theme("Ground", "#B07219", "#C98B2E", "\U0001FAA8",
                   ("Garbage Collect", "Reclaims unused memory automatically"),
                   ("Seismic Build", "Quakes with enterprise-scale deployments")),
    "C++": _theme("Dragon", "#F34B7D", "#FF6B9D", "\U0001F409",
                  ("Pointer Strike", "Manipulates memory addresses directly"),
                  ("Template Fury", "Generates compile-time metaprograms")),
    "C": _theme("Normal", "#555555", "#777777", "⚪",
                ("Memory Alloc", "Reserves raw memory blocks"),
                ("System Call", "Invokes kernel-level operations")),
    "C#": _theme("Psychic", "#178600", "#68A357", "\U0001F52E",
                 ("LINQ Pulse", "Queries data with mental clarity"),
                 ("Abstract Crush", "Manifests complex inheritance hierarchies")),
    "Ruby": _theme("Fairy", "#CC342D", "#E05A4F", "✨",
                   ("Gem Sparkle", "Conjures elegant metaprogramming"),
                   ("Magic Method", "Enchants objects with dynamic behavior")),
    "Swift": _theme("Flying", "#F05138", "#FF6B52", "\U0001F54A️",
                    ("Protocol Wing", "Soars with interface conformance"),
                    ("Unwrap Dive", "Strikes through optional bindings")),
    "Kotlin": _theme("Ghost", "#A97BFF", "#B98EFF", "\U0001F47B",
                     ("Null Safety", "Phases through nullable references"),
                     ("Coroutine Haunt", "Suspends execution in the shadows")),
    "PHP": _theme("Poison", "#777BB4", "#9B9ECE", "☠️",
                  ("Injection Sting", "Embeds dynamic server-side logic"),
                  ("Toxic Query", "Contaminates databases with SQL")),
    "Shell": _theme("Dark", "#89E051", "#A4EC7B", "\U0001F311",
                    ("Shadow Pipe", "Chains commands in darkness"),
                    ("Root Escalate", "Gains superuser privileges")),
    "Dart": _theme("Ice", "#00B4AB", "#2DD4BF", "❄️",
                   ("Freeze Frame", "Renders a frozen UI snapshot"),
                   ("Widget Blizzard", "Builds a storm of reactive components")),
    "R": _theme("Water", "#198CE7", "#4DA6FF", "\U0001F4A7",
                ("Data Stream", "Flows statistical analysis pipelines"),
                ("Regression Wave", "Drowns problems in predictive models")),
    "Scala": _theme("Fire", "#C22D40", "#E04958", "\U0001F525",
                    ("Pattern Burn", "Ignites case class matching"),
                    ("Functional Inferno", "Immolates imperative code")),
    "Haskell": _theme("Psychic", "#5E5086", "#7B6BA6", "\U0001F52E",
                      ("Monad Mind", "Abstracts computation through pure thought"),
                      ("Lazy Psybeam", "Evaluates only when truly necessary")),
    "Elixir": _theme("Fairy", "#6E4A7E", "#8B6A9E", "✨",
                     ("Phoenix Charm", "Spawns resilient web frameworks"),
                     ("Actor Enchant", "Distributes magic across nodes")),
    "Lua": _theme("Dark", "#000080", "#2020B0", "\U0001F311",
                  ("Script Shadow", "Embeds into host applications"),
                  ("Metatable Void", "Warps object behavior with metatables")),
    "Vue": _theme("Grass", "#42B883", "#5CD09C", "\U0001F33F",
                  ("Reactive Vine", "Binds data to the view layer"),
                  ("Component Bloom", "Grows a garden of reusable components")),
    "HTML": _theme("Normal", "#E34C26", "#F06529", "⚪",
                   ("Tag Strike", "Structures semantic markup"),
                   ("DOM Tree", "Constructs hierarchical document models")),
    "CSS": _theme("Water", "#563D7C", "#6B4F91", "\U0001F4A7",
                  ("Style Flow", "Cascades design rules"),
                  ("Flexbox Flood", "Drowns layouts in responsive design")),
})

DEFAULT_THEME = _theme("Normal", "#6B7280", "#9CA3AF", "⚪",
                       ("Code Strike", "Executes basic programming logic"),
                       ("Stack Overflow", "Unleashes maximum recursion depth"))

# Matchups are keyed by type name, not language.
TYPE_WEAKNESSES = MappingProxyType({
    "Fire": "Water", "Water": "Electric", "Electric": "Ground", "Grass": "Fire",
    "Ground": "Water", "Steel": "Fire", "Dragon": "Ice", "Ice": "Fire",
    "Flying": "Electric", "Ghost": "Dark", "Dark": "Fairy", "Fairy": "Steel",
    "Poison": "Psychic", "Psychic": "Dark", "Normal": "Ground",
})

TYPE_RESISTANCES = MappingProxyType({
    "Fire": "Grass", "Water": "Fire", "Electric": "Flying", "Grass": "Water",
    "Ground": "Electric", "Steel": "Ice", "Dragon": "Grass", "Ice": "Ground",
    "Flying": "Grass", "Ghost": "Poison", "Dark": "Psychic", "Fairy": "Dark",
    "Poison": "Grass", "Psychic": "Ghost", "Normal": "Ghost",
})

# A representative language per type, so a matchup type can be drawn in its colors.
TYPE_LANGUAGES = MappingProxyType({
    "Fire": "Python", "Electric": "TypeScript", "Water": "Go", "Steel": "Rust",
    "Ground": "Java", "Dragon": "C++", "Normal": "C", "Psychic": "C#",
    "Fairy": "Ruby", "Flying": "Swift", "Ghost": "Kotlin", "Poison": "PHP",
    "Dark": "Shell", "Ice": "Dart", "Grass": "Vue",
})

CARD_ART = (
    ({"Python", "Scala"}, "python.jpg"),
    ({"TypeScript", "JavaScript"}, "typescript.jpg"),
    ({"Java", "Kotlin", "C#"}, "java.jpg"),
    ({"Rust", "Go", "C", "C++"}, "rust+go+c.jpg"),
    ({"R", "Haskell"}, "aimljupyer.jpg"),
    ({"Shell", "PHP", "Lua"}, "devops.jpg"),
)
DEFAULT_CARD_ART = "multicoder.jpg"


def get_language_theme(language) -> LanguageCardTheme:
    return LANGUAGE_CARD_THEMES.get(language, DEFAULT_THEME)


def get_type_theme(type_name: str) -> LanguageCardTheme:
    """Theme used to color a matchup energy icon of the given type."""
    return get_language_theme(TYPE_LANGUAGES.get(type_name))


def get_weakness(type_name: str) -> TypeMatchup:
    return TypeMatchup(type=TYPE_WEAKNESSES.get(type_name, "Water"), modifier="×2")


def get_resistance(type_name: str) -> TypeMatchup:
    return TypeMatchup(type=TYPE_RESISTANCES.get(type_name, "Normal"), modifier="-30")


def get_card_art_path(language: str) -> str:
    for languages, filename in CARD_ART:
        if language in languages:
            return filename
    return DEFAULT_CARD_ART
