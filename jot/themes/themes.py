from textual.theme import Theme

jot_ink = Theme(
    name="jot-ink",
    primary="#7AA2F7",
    secondary="#565F89",
    accent="#9ECE6A",
    foreground="#D5D9E8",
    background="#15161E",
    success="#9ECE6A",
    warning="#E0AF68",
    error="#F7768E",
    surface="#1C1E29",
    panel="#242736",
    dark=True,
    variables={
        "footer-key-foreground": "#7aa2f7",
        "input-selection-background": "#7aa2f7 30%",
        "block-cursor-text-style": "none",
    },
)

jot_notebook = Theme(
    name="jot-notebook",
    primary="#3B5B92",
    secondary="#6B7A8F",
    accent="#C0392B",
    foreground="#22252B",
    background="#FBF8F0",
    success="#2E7D32",
    warning="#B7791F",
    error="#C0392B",
    surface="#F2EEE3",
    panel="#E8E2D4",
    dark=False,
    variables={
        "footer-key-foreground": "#3b5b92",
        "input-selection-background": "#3b5b92 25%",
        "block-cursor-text-style": "none",
    },
)

jot_mint = Theme(
    name="jot-mint",
    primary="#10B981",
    secondary="#0F766E",
    accent="#F59E0B",
    foreground="#E6FFF6",
    background="#0B1512",
    success="#10B981",
    warning="#F59E0B",
    error="#EF4444",
    surface="#11201B",
    panel="#172B24",
    dark=True,
    variables={
        "footer-key-foreground": "#10b981",
        "input-selection-background": "#10b981 30%",
        "block-cursor-text-style": "none",
    },
)

ALL_THEMES: list[Theme] = [
    jot_ink,
    jot_notebook,
    jot_mint,
]
