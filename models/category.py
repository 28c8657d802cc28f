from dataclasses import dataclass


@dataclass
class Category:
    id: str
    name: str
    type: str           # 'income' | 'expense'
    color_hex: str = "#888888"
    icon: str = ""

    @property
    def is_income(self) -> bool:
        return self.type == "income"
