from pydantic import BaseModel, ConfigDict


class ViewerConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_url: str
    max_scroll: float
    frame_time: float
    target_size: float
    easing: str = "easeOutQuad"
    reverse: bool = True
