"""Static health myths and the facts that debunk them"""

from typing import List

from lifedash_gateway.domain.models import HealthMyth

HEALTH_MYTHS_AND_FACTS: List[HealthMyth] = [
    HealthMyth(
        myth="You need 8 glasses of water a day.",
        fact="Water needs vary by individual. The color of your urine is a better indicator of hydration.",
    ),
    HealthMyth(
        myth="Eating late at night makes you gain weight.",
        fact="Total daily calorie intake matters more than when you eat.",
    ),
    HealthMyth(
        myth="Cracking your knuckles causes arthritis.",
        fact="No studies have found a connection between knuckle cracking and arthritis.",
    ),
    HealthMyth(
        myth="You lose most of your body heat through your head.",
        fact="You lose heat through any uncovered part of your body at roughly the same rate.",
    ),
    HealthMyth(
        myth="Reading in dim light damages your eyes.",
        fact="Reading in dim light may cause eye strain but doesn't cause permanent damage.",
    ),
    HealthMyth(
        myth="Vaccines cause autism.",
        fact="Extensive research has found no link between vaccines and autism.",
    ),
    HealthMyth(
        myth="You should wait an hour after eating before swimming.",
        fact="There's no evidence that swimming after eating increases cramp risk.",
    ),
    HealthMyth(
        myth="Antibiotics can treat the common cold.",
        fact="Colds are caused by viruses, which antibiotics cannot treat.",
    ),
    HealthMyth(
        myth="You only use 10% of your brain.",
        fact="Most of your brain is active most of the time, even during sleep.",
    ),
    HealthMyth(
        myth="Vitamin C prevents colds.",
        fact="Vitamin C doesn't prevent colds but may slightly reduce their duration.",
    ),
]
