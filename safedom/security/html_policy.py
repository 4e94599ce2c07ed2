"""
HTML Sanitization Allow-Lists

Element and attribute allow-lists used by the HTML sanitizer, kept as data so
they can be reviewed and tested without touching the tree walker. The default
lists follow the Closure / Angular sanitizer allow-lists, extended with
``iframe`` (whose ``srcdoc`` stays forbidden).
"""

from dataclasses import dataclass


def _names(*groups: str) -> frozenset[str]:
    return frozenset(name for group in groups for name in group.split(",") if name)


# Elements that close themselves
VOID_ELEMENTS = _names("area,br,col,hr,img,wbr")

# Elements with optional end tags
OPTIONAL_END_TAG_BLOCK_ELEMENTS = _names("colgroup,dd,dt,li,p,tbody,td,tfoot,th,thead,tr")
OPTIONAL_END_TAG_INLINE_ELEMENTS = _names("rp,rt")
OPTIONAL_END_TAG_ELEMENTS = OPTIONAL_END_TAG_BLOCK_ELEMENTS | OPTIONAL_END_TAG_INLINE_ELEMENTS

BLOCK_ELEMENTS = OPTIONAL_END_TAG_BLOCK_ELEMENTS | _names(
    "address,article,aside,blockquote,caption,center,del,details,dialog,dir,div,dl,figure,",
    "figcaption,footer,h1,h2,h3,h4,h5,h6,header,hgroup,hr,ins,main,map,menu,nav,ol,pre,",
    "section,summary,table,ul",
)

INLINE_ELEMENTS = OPTIONAL_END_TAG_INLINE_ELEMENTS | _names(
    "a,abbr,acronym,audio,b,bdi,bdo,big,br,cite,code,del,dfn,em,font,i,iframe,img,ins,kbd,",
    "label,map,mark,picture,q,ruby,rp,rt,s,samp,small,source,span,strike,strong,sub,sup,",
    "time,track,tt,u,var,video",
)

VALID_ELEMENTS = VOID_ELEMENTS | BLOCK_ELEMENTS | INLINE_ELEMENTS | OPTIONAL_END_TAG_ELEMENTS

# Elements removed together with everything inside them
DROP_CONTENT_ELEMENTS = _names("script,style,template,object,embed,applet,noscript,noembed,noframes,xmp,svg,math")

# Open elements with optional end tags, and the child start tags that close
# them. html.parser nests "<p>a<p>b" where a browser builds two siblings.
_CLOSES_P = _names(
    "address,article,aside,blockquote,details,dialog,dir,div,dl,fieldset,figcaption,figure,",
    "footer,form,h1,h2,h3,h4,h5,h6,header,hgroup,hr,main,menu,nav,ol,p,pre,section,table,ul",
)
IMPLIED_END_TAGS = {
    "p": _CLOSES_P,
    "li": _names("li"),
    "dt": _names("dd,dt"),
    "dd": _names("dd,dt"),
    "rt": _names("rp,rt"),
    "rp": _names("rp,rt"),
    "tr": _names("tbody,tfoot,tr"),
    "td": _names("tbody,td,tfoot,th,tr"),
    "th": _names("tbody,td,tfoot,th,tr"),
    "thead": _names("tbody,tfoot"),
    "tbody": _names("tbody,tfoot"),
}

# Attributes holding a single URL, checked with the URL sanitizer
URI_ATTRS = _names("background,cite,href,itemtype,longdesc,poster,src,xlink:href")

# Attributes holding a list of image candidates
SRCSET_ATTRS = _names("srcset")

HTML_ATTRS = _names(
    "abbr,accesskey,align,alt,autoplay,axis,bgcolor,border,cellpadding,cellspacing,class,",
    "clear,color,cols,colspan,compact,controls,coords,datetime,default,dir,download,face,",
    "headers,height,hidden,hreflang,hspace,ismap,itemscope,itemprop,kind,label,lang,",
    "language,loop,media,muted,nohref,nowrap,open,preload,rel,rev,role,rows,rowspan,rules,",
    "scope,scrolling,shape,size,sizes,span,srclang,start,summary,tabindex,target,title,",
    "translate,type,usemap,valign,value,vspace,width",
)

ARIA_ATTRS = _names(
    "aria-activedescendant,aria-atomic,aria-autocomplete,aria-busy,aria-checked,aria-colcount,",
    "aria-colindex,aria-colspan,aria-controls,aria-current,aria-describedby,aria-details,",
    "aria-disabled,aria-dropeffect,aria-errormessage,aria-expanded,aria-flowto,aria-grabbed,",
    "aria-haspopup,aria-hidden,aria-invalid,aria-keyshortcuts,aria-label,aria-labelledby,",
    "aria-level,aria-live,aria-modal,aria-multiline,aria-multiselectable,aria-orientation,",
    "aria-owns,aria-placeholder,aria-posinset,aria-pressed,aria-readonly,aria-relevant,",
    "aria-required,aria-roledescription,aria-rowcount,aria-rowindex,aria-rowspan,",
    "aria-selected,aria-setsize,aria-sort,aria-valuemax,aria-valuemin,aria-valuenow,",
    "aria-valuetext",
)

VALID_ATTRS = URI_ATTRS | SRCSET_ATTRS | HTML_ATTRS | ARIA_ATTRS


@dataclass(frozen=True)
class HtmlSanitizationPolicy:
    """
    Allow-lists driving the HTML sanitizer.

    Attributes:
        allowed_elements: Elements kept in the output; others are unwrapped
        drop_content_elements: Elements removed along with their content
        allowed_attributes: Attributes kept on allowed elements
        url_attributes: Allowed attributes whose value must be a safe URL
        srcset_attributes: Allowed attributes whose value is a list of safe URLs
        max_passes: Parse/serialize rounds allowed before unstable markup is dropped
    """

    allowed_elements: frozenset[str] = VALID_ELEMENTS
    drop_content_elements: frozenset[str] = DROP_CONTENT_ELEMENTS
    allowed_attributes: frozenset[str] = VALID_ATTRS
    url_attributes: frozenset[str] = URI_ATTRS
    srcset_attributes: frozenset[str] = SRCSET_ATTRS
    max_passes: int = 5

    def __post_init__(self):
        overlap = self.allowed_elements & self.drop_content_elements
        if overlap:
            raise ValueError(f"Elements cannot be both allowed and dropped: {', '.join(sorted(overlap))}")
        if self.max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {self.max_passes}")

    def is_element_allowed(self, name: str) -> bool:
        return name.lower() in self.allowed_elements

    def drops_content(self, name: str) -> bool:
        return name.lower() in self.drop_content_elements

    def is_attribute_allowed(self, name: str) -> bool:
        """Event handlers (on*) are never allowed, whatever the allow-list says."""
        name = name.lower()
        if name.startswith("on"):
            return False
        return name in self.allowed_attributes


DEFAULT_POLICY = HtmlSanitizationPolicy()
