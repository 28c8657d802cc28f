from dataclasses import dataclass


@dataclass
class Transaction:
    id: str
    amount: float
    type: str               # 'income' | 'expense'
    category_id: str
    date: str               # 'YYYY-MM-DD'
    note: str = ""
    created_at: str = ""
