from dataclasses import asdict, dataclass

KINDS = ("income", "expense")


@dataclass(frozen=True)
class NewTransaction:
    kind: str
    description: str
    amount: int
    date: str


@dataclass(frozen=True)
class Transaction:
    id: int
    kind: str
    description: str
    amount: int
    date: str

    @classmethod
    def from_row(cls, row) -> "Transaction":
        return cls(
            id=int(row["id"]),
            kind=row["kind"],
            description=row["description"],
            amount=int(row["amount"]),
            date=row["date"],
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Summary:
    total_income: int
    total_expense: int

    @property
    def balance(self) -> int:
        return self.total_income - self.total_expense

    def to_dict(self) -> dict:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "balance": self.balance,
        }
