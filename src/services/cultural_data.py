"""Built-in cultural reference tables.

Everything here is assembled once by ``build_reference_data`` into read-only
mappings of frozen records; the guide never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from models import (
    BargainingTip,
    Custom,
    EtiquetteRule,
    FareRange,
    Festival,
    RegionalInfo,
    TransportationInfo,
)


@dataclass(frozen=True)
class CulturalTables:
    regions: Mapping[str, RegionalInfo]
    festivals: Mapping[str, Festival]
    etiquette: Mapping[str, Tuple[EtiquetteRule, ...]]
    bargaining: Mapping[str, Tuple[BargainingTip, ...]]


def default_regional_info(region: str) -> RegionalInfo:
    return RegionalInfo(
        region=region,
        languages=("Hindi", "English"),
        transportation=TransportationInfo(
            public_transport=("Bus", "Auto-rickshaw"),
            tips=("Negotiate fare beforehand", "Keep small change ready"),
            costs=(FareRange(10, 100),),
        ),
    )


def _regions() -> dict[str, RegionalInfo]:
    delhi = RegionalInfo(
        region="Delhi",
        languages=("Hindi", "English", "Punjabi", "Urdu"),
        customs=(
            Custom(
                name="Namaste Greeting",
                description="Traditional greeting with palms pressed together",
                significance="Shows respect and acknowledges the divine in others",
                dos_donts=(
                    "Do: Press palms together at chest level",
                    "Do: Bow head slightly",
                    "Don't: Use only one hand",
                    "Don't: Forget to smile",
                ),
            ),
            Custom(
                name="Removing Shoes",
                description="Remove shoes before entering homes and religious places",
                significance="Maintains cleanliness and shows respect",
                dos_donts=(
                    "Do: Remove shoes at the entrance",
                    "Do: Place shoes neatly",
                    "Don't: Wear shoes inside homes",
                    "Don't: Step on the threshold with shoes",
                ),
            ),
        ),
        festivals=(
            Festival(
                name="Diwali",
                date="October/November (varies)",
                significance="Festival of lights celebrating victory of light over darkness",
                celebrations=("Light diyas and candles", "Fireworks", "Sweet distribution", "Family gatherings"),
                regions=("Delhi", "All India"),
                dos_donts=(
                    "Do: Wish people Happy Diwali",
                    "Do: Accept sweets graciously",
                    "Don't: Refuse offered sweets",
                    "Don't: Be too loud during celebrations",
                ),
            ),
        ),
        etiquette=(
            EtiquetteRule(
                context="dining",
                rules=(
                    "Wash hands before and after eating",
                    "Use right hand for eating",
                    "Don't waste food",
                    "Wait for elders to start eating",
                ),
                importance="high",
            ),
        ),
        transportation=TransportationInfo(
            public_transport=("Delhi Metro", "DTC Bus", "Auto-rickshaw", "Uber/Ola"),
            tips=(
                "Metro is fastest for long distances",
                "Keep metro card/token ready",
                "Negotiate auto fare or use meter",
                "Avoid rush hours (8-10 AM, 6-8 PM)",
            ),
            # metro, bus, auto
            costs=(FareRange(10, 60), FareRange(5, 25), FareRange(30, 200)),
        ),
    )

    mumbai = RegionalInfo(
        region="Mumbai",
        languages=("Hindi", "Marathi", "English", "Gujarati"),
        customs=(
            Custom(
                name="Local Train Etiquette",
                description="Specific behavior expected in Mumbai local trains",
                significance="Ensures smooth travel for millions of commuters",
                dos_donts=(
                    "Do: Let people exit first",
                    "Do: Offer seats to elderly and women",
                    "Don't: Block the doors",
                    "Don't: Put feet on seats",
                ),
            ),
        ),
        festivals=(
            Festival(
                name="Ganesh Chaturthi",
                date="August/September (varies)",
                significance="Celebration of Lord Ganesha, remover of obstacles",
                celebrations=(
                    "Ganesh idol installation",
                    "Community celebrations",
                    "Processions",
                    "Modak preparation",
                ),
                regions=("Mumbai", "Maharashtra"),
                dos_donts=(
                    "Do: Participate respectfully in processions",
                    "Do: Try modak (traditional sweet)",
                    "Don't: Disturb religious ceremonies",
                    "Don't: Litter during processions",
                ),
            ),
        ),
        etiquette=(
            EtiquetteRule(
                context="local trains",
                rules=(
                    "Stand on the left side of escalators",
                    "Let passengers exit before boarding",
                    "Keep backpack in front during rush hour",
                    "Offer seats to those who need them more",
                ),
                importance="high",
            ),
        ),
        transportation=TransportationInfo(
            public_transport=("Local Trains", "BEST Bus", "Auto-rickshaw", "Taxi", "Metro"),
            tips=(
                "Local trains are lifeline of Mumbai",
                "Buy monthly pass for regular travel",
                "Avoid peak hours if possible",
                "Keep exact change for buses",
            ),
            # local train, bus, auto/taxi
            costs=(FareRange(5, 25), FareRange(8, 50), FareRange(25, 150)),
        ),
    )
    return {"delhi": delhi, "mumbai": mumbai}


def _festivals() -> dict[str, Festival]:
    return {
        "diwali": Festival(
            name="Diwali",
            date="October/November (varies by lunar calendar)",
            significance="Festival of lights celebrating the victory of light over darkness and good over evil",
            celebrations=(
                "Lighting oil lamps (diyas) and candles",
                "Decorating homes with rangoli",
                "Exchanging sweets and gifts",
                "Fireworks and crackers",
                "Lakshmi Puja (worship of goddess of wealth)",
            ),
            regions=("All India", "Nepal", "Sri Lanka", "Malaysia", "Singapore"),
            dos_donts=(
                "Do: Wish everyone Happy Diwali",
                "Do: Accept sweets and gifts graciously",
                "Do: Dress in new or good clothes",
                "Do: Light lamps in the evening",
                "Don't: Refuse offered sweets",
                "Don't: Burst crackers near hospitals or schools",
                "Don't: Waste food during celebrations",
            ),
        ),
        "holi": Festival(
            name="Holi",
            date="March (varies by lunar calendar)",
            significance="Festival of colors celebrating spring, love, and the triumph of good over evil",
            celebrations=(
                "Playing with colored powders (gulal)",
                "Water balloons and water guns",
                "Traditional sweets like gujiya",
                "Folk songs and dances",
                "Holika Dahan (bonfire) on the eve",
            ),
            regions=("North India", "Central India", "Nepal"),
            dos_donts=(
                "Do: Wear old clothes that can get dirty",
                "Do: Apply oil to hair and skin for protection",
                "Do: Play with natural colors if possible",
                "Do: Respect those who don't want to play",
                "Don't: Force colors on unwilling people",
                "Don't: Use harmful chemical colors",
                "Don't: Waste water excessively",
            ),
        ),
    }


def _etiquette() -> dict[str, Tuple[EtiquetteRule, ...]]:
    return {
        "dining": (
            EtiquetteRule(
                context="Traditional Indian Dining",
                rules=(
                    "Wash hands before and after eating",
                    "Use right hand for eating (left is considered unclean)",
                    "Don't waste food - take only what you can finish",
                    "Wait for elders or hosts to start eating",
                    "Don't touch serving spoons with your plate",
                    "Compliment the food to show appreciation",
                ),
                importance="high",
            ),
            EtiquetteRule(
                context="Restaurant Dining",
                rules=(
                    "Wait to be seated in upscale restaurants",
                    "Tipping 10% is customary but not mandatory",
                    "Don't call waiters by snapping fingers",
                    "Share food - Indian dining is often communal",
                ),
                importance="medium",
            ),
        ),
        "religious": (
            EtiquetteRule(
                context="Temple Visits",
                rules=(
                    "Remove shoes before entering",
                    "Cover your head if required",
                    "Don't point feet towards deities",
                    "Maintain silence or speak softly",
                    "Don't take photos without permission",
                    "Dress modestly - cover shoulders and legs",
                ),
                importance="high",
            ),
        ),
    }


def _bargaining() -> dict[str, Tuple[BargainingTip, ...]]:
    return {
        "delhi": (
            BargainingTip(
                context="Street Markets (Chandni Chowk, Karol Bagh)",
                tips=(
                    "Start at 30-40% of quoted price",
                    "Walk away if price doesn't come down",
                    "Buy multiple items for better deals",
                    "Compare prices at 2-3 shops",
                    "Be polite but firm",
                ),
                expected_discount="40-60% off initial price",
                cultural_notes=(
                    "Bargaining is expected and part of the culture",
                    "Shopkeepers often quote 2-3x the actual price",
                    "Best deals in the evening when shops want to close sales",
                ),
            ),
        ),
        "mumbai": (
            BargainingTip(
                context="Street Markets (Colaba Causeway, Linking Road)",
                tips=(
                    "Start at 50% of quoted price",
                    "Bundle purchases for better rates",
                    "Check quality before bargaining",
                    "Use local language phrases for better prices",
                    "Shop during weekdays for less crowd and better deals",
                ),
                expected_discount="30-50% off initial price",
                cultural_notes=(
                    "Mumbai shopkeepers are generally more fixed on prices",
                    "Tourist areas have higher initial quotes",
                    "Local markets offer better bargaining opportunities",
                ),
            ),
        ),
        "general": (
            BargainingTip(
                context="Auto-rickshaw",
                tips=(
                    "Insist on using the meter",
                    "Know approximate fare beforehand",
                    "Negotiate before getting in",
                    "Keep exact change ready",
                    "Use ride-hailing apps for transparent pricing",
                ),
                expected_discount="10-20% off quoted price",
                cultural_notes=(
                    'Meters are mandatory but often "not working"',
                    "Night charges are 25% extra after 10 PM",
                    "Refuse if driver demands too much extra",
                ),
            ),
        ),
    }


def build_reference_data() -> CulturalTables:
    return CulturalTables(
        regions=MappingProxyType(_regions()),
        festivals=MappingProxyType(_festivals()),
        etiquette=MappingProxyType(_etiquette()),
        bargaining=MappingProxyType(_bargaining()),
    )
