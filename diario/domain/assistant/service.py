"""Assistant service - clinical report generation and evolution rewriting"""

import logging
from datetime import date

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...models import User
from .context import build_overview_context, build_patient_context
from .gateway import AIGateway
from .schemas import ImproveEvolutionRequest, ReportRequest

logger = logging.getLogger(__name__)

REPORT_SYSTEM_PROMPT = """Você é um assistente especializado em gerar relatórios clínicos profissionais para terapeutas e profissionais de saúde.

REGRAS DE FORMATAÇÃO OBRIGATÓRIAS:
1. O relatório DEVE seguir padrão institucional profissional.
2. Estruture com seções numeradas (1., 2., 3., etc.) e subtítulos claros.
3. Use tabelas Markdown (com | e ---) para dados tabulares como identificação do paciente, resumo de frequência etc.
4. Use listas numeradas (1), 2), 3)) para recomendações e considerações.
5. Use bullet points (- item) para detalhamentos dentro de seções.
6. NÃO use linhas horizontais (---) como divisores visuais entre seções.
7. NÃO use ### markdown headers, use apenas texto em CAPS ou numeração.
8. Parágrafos curtos e objetivos. Linguagem técnica e profissional.
9. Inclua SEMPRE ao final uma seção "CONSIDERAÇÕES FINAIS E CONDUTA" com recomendações numeradas.
10. Inclua ao final: "Responsável Técnico: (Espaço para assinatura e carimbo do profissional)"
11. A primeira seção deve ser "CABEÇALHO E IDENTIFICAÇÃO" com uma tabela de dados do paciente.
12. Inclua uma seção "RESUMO EXECUTIVO" com dados de frequência.

Data atual: {today}."""

IMPROVE_SYSTEM_PROMPT = """Você é um assistente especializado em melhorar textos de evoluções clínicas para profissionais de saúde (psicólogos, fonoaudiólogos, terapeutas ocupacionais, etc.).

REGRAS ABSOLUTAS:
1. PRESERVE FIELMENTE o sentido, os fatos e as observações do texto original. NUNCA inverta ou contradiga o que foi descrito.
2. Seu papel é APENAS: corrigir gramática/ortografia, expandir o texto de forma coerente com o que foi dito, e usar vocabulário técnico-clínico apropriado.
3. Amplie e elabore o que já foi escrito, sem inventar comportamentos ou situações que não foram mencionadas.
4. Torne o texto mais profissional, objetivo e extenso, mas sempre fiel ao conteúdo original.
5. Mantenha em português brasileiro.
6. NÃO mude fatos, datas, comportamentos ou dados clínicos.
7. Retorne APENAS o texto melhorado, sem explicações adicionais."""


class AssistantService:
    def __init__(self, db: Session, gateway: AIGateway):
        self.db = db
        self.gateway = gateway

    def build_report_messages(self, data: ReportRequest, user: User) -> list[dict]:
        if data.mode == "guided":
            context = build_patient_context(self.db, user, data.patient_id, data.period)
            prompt = (
                "Gere um relatório clínico evolutivo institucional detalhado e profissional "
                "com base nos seguintes dados. Siga rigorosamente as regras de formatação do "
                f"sistema:\n{context}"
            )
        else:
            context = build_overview_context(self.db, user)
            prompt = (
                f"{data.command.strip()}\n\nSiga rigorosamente as regras de formatação "
                f"institucional do sistema. Use os seguintes dados como base:\n{context}"
            )

        return [
            {
                "role": "system",
                "content": REPORT_SYSTEM_PROMPT.format(today=date.today().strftime("%d/%m/%Y")),
            },
            {"role": "user", "content": prompt},
        ]

    async def generate_report(self, data: ReportRequest, user: User) -> StreamingResponse:
        messages = self.build_report_messages(data, user)
        logger.info(f"🤖 Report requested by user {user.id} (mode={data.mode}, period={data.period})")
        return await self.gateway.stream(messages)

    async def improve_evolution(self, data: ImproveEvolutionRequest, user: User) -> dict:
        text = (data.text or "").strip()
        if not text:
            raise HTTPException(status_code=400, detail="Texto vazio")

        improved = await self.gateway.complete(
            [
                {"role": "system", "content": IMPROVE_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": f"Melhore o seguinte texto de evolução clínica:\n\n{text}",
                },
            ]
        )
        logger.info(f"🤖 Evolution text improved for user {user.id}")
        return {"improved": improved or data.text}
