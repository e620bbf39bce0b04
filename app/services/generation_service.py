from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from openai import AsyncAzureOpenAI

from app.core.config import Settings

logger = logging.getLogger(__name__)

BIO_PROMPT_EN = (
    "Write a professional, engaging and slightly warm career profile (about 2-3 sentences) "
    "for the following company employee.\n"
    "Name: {name}\n"
    "Role: {role}\n"
    "Department: {department}\n"
    "Join date: {join_date}\n"
    "Core skills: {skills}\n\n"
    "Tone: businesslike but human. If the employee has been with the company for a long time, "
    "highlight their seniority and contribution. Output only the profile text, without a "
    '"Profile:" prefix.'
)

BIO_PROMPT_ZH = (
    "请为以下公司员工撰写一段专业、吸引人且略带温暖的中文职业简介（约2-3句）。\n"
    "员工姓名: {name}\n"
    "职位: {role}\n"
    "部门: {department}\n"
    "入职日期: {join_date}\n"
    "核心技能: {skills}\n\n"
    "语调: 商务但具有人文关怀。如果该员工入职时间较长，请强调其资历和贡献。"
    '请直接输出简介内容，不要包含"简介："等前缀。'
)

YEAR_PROMPT_EN = (
    "Analyze the roles of the employees who joined the company in {year}.\n"
    "List: {staff}\n\n"
    'Give this year a short theme (for example "The Year of Engineering Expansion" or '
    '"Design Renaissance"), then explain the reason in one sentence.'
)

YEAR_PROMPT_ZH = (
    "请分析该公司在 {year} 年入职的员工职位列表。\n"
    "列表: {staff}\n\n"
    '请给这一年起一个简短的中文"年度主题"（例如"技术扩张之年"或"设计变革元年"）。'
    "然后用一句话解释原因。"
)

FALLBACKS: dict[str, dict[str, str]] = {
    "en": {
        "missing_key": "AI features need an API key. Check the service configuration.",
        "bio_failed": "A profile could not be generated right now.",
        "year_failed": "This year could not be analyzed right now.",
    },
    "zh": {
        "missing_key": "未找到 API Key，请检查环境配置。",
        "bio_failed": "暂时无法生成简介。",
        "year_failed": "暂时无法进行分析。",
    },
}

LLM_TEMPERATURE = 0.7
LLM_MAX_TOKENS = 400


class GenerationService:
    """Best-effort text generation. Every public call returns a string and never raises."""

    def __init__(self) -> None:
        self.client: AsyncAzureOpenAI | None = None
        self.initialized = False
        self.model = ""

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if not settings.OPENAI_ENDPOINT or not settings.OPENAI_API_KEY:
            logger.warning("OpenAI credentials missing, GenerationService not initialized")
            return

        self.client = AsyncAzureOpenAI(
            azure_endpoint=settings.OPENAI_ENDPOINT,
            api_key=settings.OPENAI_API_KEY,
            api_version=settings.OPENAI_API_VERSION,
        )
        self.model = settings.OPENAI_CHAT_MODEL
        self.initialized = True

    async def close(self) -> None:
        self.client = None
        self.initialized = False

    def _fallback(self, language: str, key: str) -> str:
        return FALLBACKS.get(language, FALLBACKS["en"])[key]

    def build_bio_prompt(
        self,
        name: str,
        role: str,
        department: str,
        join_date: date | str,
        skills: Sequence[str],
        language: str = "en",
    ) -> str:
        template = BIO_PROMPT_ZH if language == "zh" else BIO_PROMPT_EN
        join = join_date.isoformat() if isinstance(join_date, date) else join_date
        return template.format(name=name, role=role, department=department, join_date=join, skills=", ".join(skills))

    def build_year_prompt(self, year: int, staff: Sequence[tuple[str, str]], language: str = "en") -> str:
        template = YEAR_PROMPT_ZH if language == "zh" else YEAR_PROMPT_EN
        listing = ", ".join(f"{role} ({department})" for role, department in staff)
        return template.format(year=year, staff=listing)

    async def _complete(self, prompt: str) -> str | None:
        if not self.initialized or not self.client:
            return None

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=LLM_TEMPERATURE,
            max_tokens=LLM_MAX_TOKENS,
        )
        content = response.choices[0].message.content if response.choices else None
        return content.strip() if content else ""

    async def generate_bio(
        self,
        name: str,
        role: str,
        department: str,
        join_date: date | str,
        skills: Sequence[str],
        language: str = "en",
    ) -> str:
        if not self.initialized:
            return self._fallback(language, "missing_key")

        prompt = self.build_bio_prompt(name, role, department, join_date, skills, language)
        try:
            text = await self._complete(prompt)
        except Exception:
            logger.exception("Bio generation failed for %s", name)
            return self._fallback(language, "bio_failed")
        return text or self._fallback(language, "bio_failed")

    async def analyze_year(self, year: int, staff: Sequence[tuple[str, str]], language: str = "en") -> str:
        if not self.initialized:
            return self._fallback(language, "missing_key")

        prompt = self.build_year_prompt(year, staff, language)
        try:
            text = await self._complete(prompt)
        except Exception:
            logger.exception("Year analysis failed for %d", year)
            return self._fallback(language, "year_failed")
        return text or self._fallback(language, "year_failed")


generation_service = GenerationService()
