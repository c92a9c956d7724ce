"""Narrative report generation through the OpenAI chat completions API."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from eduavalia.config import DEFAULT_INSTITUTION, Settings
from eduavalia.models import FormState, RatingItem, RatingScale

logger = logging.getLogger(__name__)

EMPTY_REPORT_FALLBACK = "Não foi possível gerar o relatório."

SYSTEM_PROMPT = (
    "Você é um Especialista em Gestão Escolar e Desenvolvimento Humano. "
    "Escreva sempre em português do Brasil, em tom empático, construtivo e profissional."
)

PROMPT_TEMPLATE = """
Atue como um Especialista em Gestão Escolar e Desenvolvimento Humano do {institution}.

Analise os dados da seguinte autoavaliação preenchida por um Auxiliar de Apoio à Inclusão Escolar.
Gere um **Relatório de Desempenho e Desenvolvimento Profissional** consistente, empático e construtivo.

IMPORTANTE - REGRAS DE FORMATAÇÃO:
1. O relatório deve ser escrito estritamente em **TEXTO CONTÍNUO (prosa)**, organizado em parágrafos coesos.
2. **NÃO utilize listas com marcadores (bullet points), traços ou tópicos** em nenhuma parte do texto. Conecte as ideias usando conjunções e frases de transição.
3. Escreva de forma dissertativa, fluida e profissional.

Estrutura Sugerida para a Narrativa:
1. **Introdução**: Apresente o profissional, data e contexto do aluno atendido, fazendo uma breve síntese executiva do perfil identificado.
2. **Análise de Competências e Desempenho**: Discorra sobre os pontos fortes (notas altas) e as áreas que necessitam de atenção (notas baixas) identificadas nas seções de conhecimento, desempenho e colaboração. Integre a análise das justificativas dadas pelo colaborador.
3. **Perspectivas e Planejamento**: Narre as motivações, desafios e aspirações do colaborador para o próximo ano, incluindo suas necessidades de formação.
4. **Recomendações Finais**: Conclua com sugestões de ações práticas ou estudos, incorporadas naturalmente ao texto final, sem listá-las.

Dados da Autoavaliação (JSON):
{payload}
"""


class ReportGenerationError(Exception):
    """The text-generation service could not produce a report."""
    pass


def build_report_payload(
    form: FormState,
    scale: RatingScale,
    institution: str = DEFAULT_INSTITUTION,
) -> Dict[str, Any]:
    """Serialize the form for the prompt, resolving ratings to their labels."""
    info = form.personal_info
    evaluations = []
    for section in form.sections:
        items = []
        for item in section.items:
            if isinstance(item, RatingItem):
                items.append({
                    "pergunta": item.question,
                    "nota": item.rating,
                    "nivel": scale.label_for(item.rating),
                    "comentario_justificativa": item.comment,
                })
            else:
                items.append({
                    "pergunta": item.question,
                    "resposta": item.answer,
                })
        evaluations.append({"secao": section.title, "itens": items})

    return {
        "instituicao": institution,
        "auxiliar": info.name,
        "data": info.date,
        "aluno_transtorno": info.subject_context,
        "avaliacoes": evaluations,
    }


def build_prompt(payload: Dict[str, Any], institution: str = DEFAULT_INSTITUTION) -> str:
    return PROMPT_TEMPLATE.format(
        institution=institution,
        payload=json.dumps(payload, indent=2, ensure_ascii=False),
    ).strip()


class ReportGenerator:
    """Sends one assessment to the model and returns the narrative text."""

    def __init__(self, settings: Settings, scale: RatingScale, client: Optional[Any] = None):
        self.settings = settings
        self.scale = scale
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.settings.has_api_key:
                raise ReportGenerationError("OPENAI_API_KEY is not set")
            self._client = OpenAI(api_key=self.settings.openai_api_key)
        return self._client

    def generate(self, form: FormState) -> str:
        payload = build_report_payload(form, self.scale, self.settings.institution)
        prompt = build_prompt(payload, self.settings.institution)
        client = self.client

        logger.info(
            "Requesting report: model=%s, sections=%d, prompt_chars=%d",
            self.settings.model, len(form.sections), len(prompt),
        )
        try:
            resp = client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.temperature,
            )
        except Exception as e:
            logger.exception("Report generation failed")
            raise ReportGenerationError(
                "Falha ao gerar o relatório. Verifique sua conexão ou tente novamente."
            ) from e

        content = resp.choices[0].message.content if resp.choices else None
        if not content or not content.strip():
            logger.warning("Model returned an empty report")
            return EMPTY_REPORT_FALLBACK

        logger.info("Report generated: %d chars", len(content))
        return content
