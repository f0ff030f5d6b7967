"""
どこで: `engine.render` のシェーダ定義。
何を: ライン描画用 GLSL（view/projection 変換・頂点色・指数二乗フォグ）を生成する `Shader`。
なぜ: 黒背景に線が溶け込む奥行き表現を、頂点ごとのビュー空間深度（-z）だけで安価に得るため。
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330
in vec3 in_vert;
in vec4 in_color;
uniform mat4 view;
uniform mat4 projection;
out float v_dist;
out vec4 v_color;
void main() {
    vec4 view_pos = view * vec4(in_vert, 1.0);
    v_dist = -view_pos.z;
    v_color = in_color;
    gl_Position = projection * view_pos;
}
"""

FRAGMENT_SHADER = """
#version 330
in float v_dist;
in vec4 v_color;
uniform vec3 fog_color;
uniform float fog_density;
out vec4 frag_color;
void main() {
    float d = fog_density * v_dist;
    float fog = clamp(1.0 - exp(-d * d), 0.0, 1.0);
    frag_color = vec4(mix(v_color.rgb, fog_color, fog), v_color.a);
}
"""


class Shader:
    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """ライン用のプログラムを生成して返す。"""
        return ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
