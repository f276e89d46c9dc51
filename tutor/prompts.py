"""
Prompt builders.

The model is an untrusted text generator, so the wording below is the only
thing that shapes its output: field rules, allowed JSON shapes and the
delimiter markers are part of the contract with tutor.interpreter.

Public API:
    build_course_plan_prompt(topic)                     → PromptSpec
    build_lesson_chat_prompt(lesson, question, fmt)     → PromptSpec
    capped_lesson(lesson)                               → dict
"""

import json
from dataclasses import dataclass

from tutor.schemas import Lesson

STRUCTURED = "structured"
FREEFORM = "freeform"

COURSE_PLAN_MAX_TOKENS = 550
LESSON_CHAT_MAX_TOKENS = 700

ANSWER_START = "===ANSWER_START==="
ANSWER_END = "===ANSWER_END==="
LESSON_MD_START = "===UPDATED_LESSON_MD_START==="
LESSON_MD_END = "===UPDATED_LESSON_MD_END==="

# Size caps for the copy of the lesson embedded in the prompt.
MAX_TITLE = 160
MAX_SUMMARY = 800
MAX_CONTENT_MD = 8000
MAX_TIPS = 8


@dataclass(frozen=True)
class PromptSpec:
    system: str | None
    user: str
    response_format: str
    max_output_tokens: int


# ---------------------------------------------------------------------------
# Course plan
# ---------------------------------------------------------------------------

COURSE_PLAN_SYSTEM = (
    "Eres un asistente que SOLO diseña planes de prompts para cursos de "
    "PROGRAMACIÓN y DESARROLLO DE SOFTWARE. "
    "Siempre respondes ÚNICAMENTE JSON válido."
)

_ALLOWED_SHAPE = """{
  "allowed": true,
  "spec": {
    "title": "Título amigable para el curso en español",
    "prompt": "Instrucción clara en español para que otra IA genere el curso (enfoque, qué cubrir, ejercicios, ejemplos)",
    "level": "beginner|intermediate|advanced",
    "tags": ["tag1", "tag2", "tag3"]
  },
  "suggestions": [
    {
      "title": "Otra variación interesante del mismo tema",
      "prompt": "Instrucción clara para ese curso alternativo",
      "level": "beginner|intermediate|advanced",
      "tags": ["tag1", "tag2", "tag3"]
    }
  ]
}"""

_DISALLOWED_SHAPE = """{
  "allowed": false,
  "reason": "Motivo corto en español de por qué el tema no es aceptado (solo programación)."
}"""


def sanitize_topic(topic: str) -> str:
    """Collapse whitespace and drop double quotes so the topic cannot break out of its quoted slot."""
    return " ".join(str(topic).replace('"', "'").split())


def build_course_plan_prompt(topic: str) -> PromptSpec:
    clean = sanitize_topic(topic)
    user = f"""
El usuario pide un curso con este texto:

"{clean}"

Debes decidir si el tema es APTO (programación, desarrollo de software, bases de datos, devops, cloud, testing,
data/IA para programadores) y NO debe ser sobre drogas, armas, violencia, contenido sexual, medicina, política, etc.

### SI EL TEMA ES VÁLIDO:
Devuelve EXACTAMENTE este JSON:

{_ALLOWED_SHAPE}

Reglas:
- "title": máx. 80 caracteres, sin comillas internas.
- "prompt": 1–3 frases en español, orientadas a PROGRAMACIÓN.
- "level": exactamente uno de "beginner", "intermediate" o "advanced".
- "tags": 2–6 elementos, en inglés, minúsculas. Ej: ["python","oop","beginners"].

### SI EL TEMA NO ES VÁLIDO:
Devuelve EXACTAMENTE este JSON:

{_DISALLOWED_SHAPE}

No incluyas nada fuera de ese JSON.
""".strip()

    return PromptSpec(
        system=COURSE_PLAN_SYSTEM,
        user=user,
        response_format=STRUCTURED,
        max_output_tokens=COURSE_PLAN_MAX_TOKENS,
    )


# ---------------------------------------------------------------------------
# Lesson chat
# ---------------------------------------------------------------------------

LESSON_CHAT_SYSTEM = (
    "Eres un tutor experto en PROGRAMACIÓN para una plataforma e-learning. "
    "Te comportas como un BOT DE DUDAS personal de la lección. "
    "Respondes SIEMPRE en español neutro."
)

_FREEFORM_OUTPUT = f"""
FORMATO DE SALIDA EXACTO (TEXTO PLANO, SIN JSON):

{ANSWER_START}
<respuesta breve al estudiante en markdown, opcionalmente con 1 bloque de código corto>
{ANSWER_END}
{LESSON_MD_START}
<markdown de la lección. En la mayoría de los casos, copia EXACTAMENTE el CONTENT_MD original.
Solo añade como mucho una nota muy corta al final si es estrictamente necesario.>
{LESSON_MD_END}

Reglas:
- En ANSWER no repitas toda la teoría de la lección, solo responde a lo que el estudiante pidió.
- ANSWER debe ser mucho más corta que toda la lección.
- En UPDATED_LESSON_MD normalmente copia el CONTENT_MD original sin cambios.
- No escribas nada fuera de esos bloques.
""".strip()

_STRUCTURED_OUTPUT = """
FORMATO DE SALIDA EXACTO (SOLO JSON VÁLIDO):

{
  "answer": "respuesta breve al estudiante en markdown, opcionalmente con 1 bloque de código corto",
  "updatedLesson": {
    "title": "título de la lección (normalmente el mismo)",
    "summary": "resumen (normalmente el mismo)",
    "contentMD": "markdown de la lección; en la mayoría de los casos copia EXACTAMENTE el CONTENT_MD original",
    "tips": ["tips actuales, sin cambios salvo error grave"],
    "miniChallenge": "mini reto actual o null"
  }
}

Reglas:
- En "answer" no repitas toda la teoría de la lección, solo responde a lo que el estudiante pidió.
- "answer" debe ser mucho más corta que toda la lección.
- Si no cambias un campo de "updatedLesson", puedes omitirlo.
- No incluyas nada fuera de ese JSON.
""".strip()


def capped_lesson(lesson: Lesson) -> dict:
    """Size-capped view of the lesson for the prompt. The lesson itself is untouched."""
    return {
        "title": str(lesson.title)[:MAX_TITLE],
        "summary": str(lesson.summary)[:MAX_SUMMARY],
        "contentMD": lesson.content_md[:MAX_CONTENT_MD],
        "tips": list(lesson.tips[:MAX_TIPS]),
        "miniChallenge": lesson.mini_challenge or "",
    }


def build_lesson_chat_prompt(lesson: Lesson, question: str, response_format: str = FREEFORM) -> PromptSpec:
    if response_format not in (STRUCTURED, FREEFORM):
        raise ValueError(f"Unknown response format: {response_format!r}")

    safe = capped_lesson(lesson)
    output_rules = _STRUCTURED_OUTPUT if response_format == STRUCTURED else _FREEFORM_OUTPUT
    system = LESSON_CHAT_SYSTEM + (
        " Devuelves SOLO JSON válido." if response_format == STRUCTURED
        else " Devuelves SOLO TEXTO PLANO, nunca JSON."
    )

    user = f"""
Tienes la siguiente LECCIÓN actual (markdown recortado):

---
Title: {safe["title"]}
Summary: {safe["summary"]}

CONTENT_MD:
{safe["contentMD"]}

Tips actuales: {json.dumps(safe["tips"], ensure_ascii=False, default=str)}
MiniChallenge actual: {safe["miniChallenge"]}
---

El estudiante hace esta pregunta o pide aclaración:

"{question.strip()}"

Tu tarea:

1) Responder directamente al estudiante con una explicación clara y MUY CONCRETA,
   usando ejemplos de código coherentes con la lección (si la lección usa JavaScript, sigue con JavaScript, etc.).
   La respuesta debe ser CORTA:
   - Máximo 2–3 párrafos
   - Máximo ~10 líneas en total
   - Opcionalmente UN solo bloque de código corto (```<lenguaje>```) de 4–8 líneas si el estudiante pide ejemplos.

2) No reescribas toda la lección. Solo es un chat de dudas.
   La lección se mantiene casi igual. Solo si ves un error grave puedes sugerir una minúscula mejora.

{output_rules}
""".strip()

    return PromptSpec(
        system=system,
        user=user,
        response_format=response_format,
        max_output_tokens=LESSON_CHAT_MAX_TOKENS,
    )
