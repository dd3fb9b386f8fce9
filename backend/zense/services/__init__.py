"""
Zense Backend - Services Layer
===============================

What:  Business rules between the routes (HTTP) and the repositories
       (persistence).

Service Inventory:
    - UserService:     registration, login, profile CRUD (self-only writes)
    - JournalService:  owner-checked journal CRUD
    - ForumService:    owner-checked forum CRUD + topic association
    - TopicService:    global topic taxonomy
    - CommentService:  owner-checked comments on existing forums
    - VentService:     AI venting chat over a ConversationStore
    - GeminiService:   LLMService implementation (retry + circuit breaker)

Entity services are built per request with the request's AsyncSession
(see zense.dependencies); GeminiService and the ConversationStore are
process-wide singletons.
"""
