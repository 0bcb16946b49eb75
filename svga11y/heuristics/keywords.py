"""Ordered pattern tables for the local classifier.

Order matters in every table: the first matching row wins.
"""

from __future__ import annotations

import re

# (pattern over SVG hint text, label)
SVG_KEYWORDS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(p, re.IGNORECASE), label)
    for p, label in [
        (r"heart|coração|favorit|❤|love", "Adicionar aos favoritos"),
        (r"search|magnif|lupa|busca|pesquis", "Pesquisar"),
        (r"menu|hamburger|nav", "Abrir menu de navegação"),
        (r"close|fechar|dismiss|×", "Fechar"),
        (r"bell|sino|notif|alert", "Ver notificações"),
        (r"download|baixar", "Baixar arquivo"),
        (r"upload|enviar.*arquivo", "Enviar arquivo"),
        (r"edit|pencil|lápis|caneta|editar", "Editar"),
        (r"trash|delete|lixo|excluir|remover", "Excluir"),
        (r"settings|config|gear|engrenagem|cog", "Abrir configurações"),
        (r"user|profile|person|avatar|usuário|perfil", "Perfil do usuário"),
        (r"home|house|casa|início", "Ir para página inicial"),
        (r"plus|add(?!ress)|adicionar", "Adicionar novo item"),
        (r"check|confirm|tick|verificar|confirmar", "Confirmar"),
        (r"mail|email|envelope|carta", "Enviar email"),
        (r"phone|telefone|call|ligar", "Ligar"),
        (r"location|pin|map(?!le)|local(?!host)|mapa", "Ver localização"),
        (r"(?<!un)link|chain|corrente", "Copiar link"),
        (r"share|compartilhar", "Compartilhar"),
        (r"\bplay\b|reproduzir|iniciar", "Reproduzir"),
        (r"pause|pausar", "Pausar"),
        (r"volume|sound|som(?!e)|audio", "Ajustar volume"),
        (r"folder|pasta|diretório", "Abrir pasta"),
        (r"\bfile\b|document|arquivo|documento", "Ver documento"),
        (r"lock|secure|cadeado|seguro", "Segurança"),
        (r"\beye\b|view(?!box)|olho|visualizar", "Visualizar"),
        (r"save|salvar|disk|disco", "Salvar"),
        (r"\bcopy\b|copiar|clipboard", "Copiar"),
        (r"\bstar\b|estrela|destaque", "Marcar como favorito"),
        (r"refresh|reload|atualizar|sync", "Atualizar"),
        (r"\binfo\b|informação", "Ver informações"),
        (r"\bhelp\b|ajuda", "Obter ajuda"),
        (r"calendar|calendário", "Abrir calendário"),
        (r"clock|relógio|hora", "Ver horário"),
        (r"chat|message|mensagem|comment|comentário", "Abrir conversa"),
        (r"cart|carrinho|shop|compras", "Ver carrinho de compras"),
        (r"logout|signout|sair", "Sair da conta"),
        (r"login|signin|entrar", "Fazer login"),
        (r"arrow.*left|chevron.*left|previous|anterior", "Anterior"),
        (r"arrow.*right|chevron.*right|next|próximo", "Próximo"),
        (r"print|imprimir", "Imprimir"),
        (r"attach|anexo", "Anexar arquivo"),
        (r"\blike\b|curtir|thumb.*up", "Curtir"),
    ]
]

# File-name markers for images that carry no information.
IMG_DECORATIVE: list[re.Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in [
        r"decorativ[eo]",
        r"spacer",
        r"blank",
        r"pixel",
        r"transparent",
        r"bg[-_]?image",
        r"background",
        r"divider",
        r"separator",
        r"border",
        r"shadow",
        r"gradient",
        r"pattern",
        r"texture",
        r"1x1",
        r"placeholder",
    ]
]

# (pattern over src or tag, alt text) for icon files.
IMG_ICONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(p, re.IGNORECASE), label)
    for p, label in [
        (r"icon[-_]?search|search[-_]?icon|lupa|magnif", "Pesquisar"),
        (r"icon[-_]?menu|menu[-_]?icon|hamburger", "Menu"),
        (r"icon[-_]?close|close[-_]?icon|x[-_]?icon", "Fechar"),
        (r"icon[-_]?home|home[-_]?icon|casa", "Página inicial"),
        (r"icon[-_]?user|user[-_]?icon|avatar|profile", "Perfil do usuário"),
        (r"icon[-_]?cart|cart[-_]?icon|carrinho|shopping", "Carrinho de compras"),
        (r"icon[-_]?heart|heart[-_]?icon|favorit", "Favoritos"),
        (r"icon[-_]?star|star[-_]?icon|estrela", "Avaliação"),
        (r"icon[-_]?settings|settings[-_]?icon|config|gear|engrenagem", "Configurações"),
        (r"icon[-_]?bell|bell[-_]?icon|notif|sino", "Notificações"),
        (r"icon[-_]?mail|mail[-_]?icon|email|envelope", "Email"),
        (r"icon[-_]?phone|phone[-_]?icon|telefone|call", "Telefone"),
        (r"icon[-_]?download", "Baixar"),
        (r"icon[-_]?upload", "Enviar arquivo"),
        (r"icon[-_]?edit|edit[-_]?icon|pencil|lápis", "Editar"),
        (r"icon[-_]?delete|delete[-_]?icon|trash|lixo", "Excluir"),
        (r"icon[-_]?add|add[-_]?icon|plus|\+", "Adicionar"),
        (r"icon[-_]?check|check[-_]?icon|tick", "Confirmar"),
        (r"icon[-_]?arrow[-_]?left|prev|anterior", "Anterior"),
        (r"icon[-_]?arrow[-_]?right|next|próximo", "Próximo"),
        (r"icon[-_]?play", "Reproduzir"),
        (r"icon[-_]?pause", "Pausar"),
        (r"icon[-_]?share|compartilhar", "Compartilhar"),
        (r"icon[-_]?link", "Copiar link"),
        (r"icon[-_]?copy|copiar", "Copiar"),
        (r"icon[-_]?save|salvar", "Salvar"),
        (r"icon[-_]?print|imprimir", "Imprimir"),
        (r"icon[-_]?location|pin|mapa", "Localização"),
        (r"icon[-_]?calendar|calendário", "Calendário"),
        (r"icon[-_]?clock|relógio|hora", "Horário"),
        (r"icon[-_]?lock|cadeado|seguro", "Segurança"),
        (r"icon[-_]?eye|visualizar|olho", "Visualizar"),
        (r"icon[-_]?info|informação", "Informações"),
        (r"icon[-_]?help|ajuda", "Ajuda"),
        (r"icon[-_]?chat|message|mensagem", "Mensagens"),
        (r"icon[-_]?logout|sair", "Sair"),
        (r"icon[-_]?login|entrar", "Entrar"),
    ]
]

IMG_LOGO: list[re.Pattern[str]] = [
    re.compile(p, re.IGNORECASE)
    for p in [
        r"logo[-_]?",
        r"brand[-_]?",
        r"marca[-_]?",
        r"[-_]logo\.",
        r"[-_]brand\.",
    ]
]

# (pattern over src, label prefix) for content images.
IMG_CONTENT: list[tuple[re.Pattern[str], str]] = [
    (re.compile(p, re.IGNORECASE), prefix)
    for p, prefix in [
        (r"banner[-_ ]?", "Banner promocional"),
        (r"hero[-_ ]?", "Imagem principal"),
        (r"product[-_ ]?|produto[-_ ]?", "Produto"),
        (r"team[-_ ]?|equipe[-_ ]?", "Membro da equipe"),
        (r"testimonial[-_ ]?|depoimento[-_ ]?", "Depoimento de cliente"),
        (r"gallery[-_ ]?|galeria[-_ ]?", "Imagem da galeria"),
        (r"slide[-_ ]?|carousel[-_ ]?", "Slide"),
        (r"thumbnail[-_ ]?|thumb[-_ ]?", "Miniatura"),
        (r"avatar[-_ ]?", "Foto de perfil"),
        (r"photo[-_ ]?|foto[-_ ]?", "Fotografia"),
        (r"chart[-_ ]?|graph[-_ ]?|gráfico[-_ ]?", "Gráfico"),
        (r"diagram[-_ ]?|diagrama[-_ ]?", "Diagrama"),
        (r"map[-_ ]?|mapa[-_ ]?", "Mapa"),
        (r"infographic[-_ ]?|infográfico[-_ ]?", "Infográfico"),
    ]
]
