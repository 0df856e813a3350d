from immoauto.schemas.common import CamelModel


class ChartData(CamelModel):
    labels: list[str]
    data: list[int]
    total: int
