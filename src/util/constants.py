"""描画まわりの共有定数。"""

# GL_PRIMITIVE_RESTART の区切りインデックス（uint32 の最大値）
PRIMITIVE_RESTART_INDEX = 0xFFFFFFFF

# レイヤー色が未指定のときの基準線色（RGBA 0–1）
DEFAULT_LINE_COLOR = (1.0, 1.0, 1.0, 1.0)

# 背景/フォグの既定色（黒）
DEFAULT_BACKGROUND = (0.0, 0.0, 0.0, 1.0)
