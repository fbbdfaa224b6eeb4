"""
Stage 2: Blocks

ЦКП: Документ разбит на блоки остановок.

Входные данные: NormalizedDocument, FormatConfig (blocks.headers)
Выходные данные: BlocksResult (упорядоченный список Block)

Алгоритм:
1. Строка, начинающаяся с токена заголовка (без учёта регистра), открывает блок
2. Строка-заголовок - первая строка блока
3. Следующие строки добавляются в блок до следующего заголовка
4. Строки до первого заголовка (преамбула) отбрасываются
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from ..domain.models import Block, StopType
from ..formats.format_config import BlocksConfig
from .stage_1_normalize import NormalizedDocument


@dataclass
class BlocksResult:
    """Результат Stage 2."""
    blocks: List[Block] = field(default_factory=list)
    preamble_lines: int = 0

    def of_type(self, stop_type: StopType) -> List[Block]:
        return [block for block in self.blocks if block.stop_type == stop_type]

    def to_dict(self) -> dict:
        return {
            "blocks": [block.to_dict() for block in self.blocks],
            "preamble_lines": self.preamble_lines,
        }


class BlockStage:
    """Stage 2: сегментация строк на блоки остановок."""

    def process(self, document: NormalizedDocument, config: BlocksConfig) -> BlocksResult:
        blocks: List[Block] = []
        current: Optional[Block] = None
        preamble = 0

        for line in document.lines:
            stop_type = self.header_type(line, config)
            if stop_type is not None:
                current = Block(stop_type=stop_type, lines=[line])
                blocks.append(current)
            elif current is not None:
                current.lines.append(line)
            else:
                preamble += 1

        logger.debug(
            f"[Stage 2: Blocks] {len(blocks)} блоков "
            f"({sum(1 for b in blocks if b.stop_type == StopType.PICKUP)} погрузок), "
            f"преамбула {preamble} строк"
        )
        return BlocksResult(blocks=blocks, preamble_lines=preamble)

    def header_type(self, line: str, config: BlocksConfig) -> Optional[StopType]:
        """Тип остановки для строки-заголовка, None для обычной строки."""
        upper = line.strip().upper()
        if not upper:
            return None
        for header in config.headers:
            if upper.startswith(header.token):
                return header.stop_type
        return None
